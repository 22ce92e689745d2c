"""
Serializer fields shared by the clinic collections.

The admin screens post blank strings for untouched inputs.  A blank
value for a required field is reported as missing (not as a type
error), and a blank optional date means "no date".
"""
import html
import re

import bleach
from django.conf import settings
from rest_framework import serializers


class CleanCharField(serializers.CharField):
    """CharField that strips any HTML markup from the submitted text.

    Entities are unescaped again after cleaning so plain text such as
    ``Santos & Reyes`` is stored as typed.  A required value that was
    nothing but markup is blank once cleaned.
    """

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        value = html.unescape(bleach.clean(value, tags=[], strip=True)).strip()
        if not value and not self.allow_blank:
            self.fail('blank')
        return value


class BlankIsMissing:
    """Report a whitespace-only value as a missing field."""

    def to_internal_value(self, data):
        if isinstance(data, str) and not data.strip():
            self.fail('required')
        return super().to_internal_value(data)


class RequiredIntegerField(BlankIsMissing, serializers.IntegerField):
    def to_internal_value(self, data):
        # Booleans are ints to Python but never a stock count
        if isinstance(data, bool):
            self.fail('invalid')
        return super().to_internal_value(data)


class RequiredDateField(BlankIsMissing, serializers.DateField):
    pass


class RequiredChoiceField(BlankIsMissing, serializers.ChoiceField):
    pass


class OptionalDateField(serializers.DateField):
    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def to_internal_value(self, value):
        if isinstance(value, str) and not value.strip():
            return None
        return super().to_internal_value(value)


def validate_school_id(value: str) -> str:
    """Check ``value`` against ``SCHOOL_ID_PATTERN`` when one is configured."""
    pattern = getattr(settings, 'SCHOOL_ID_PATTERN', '')
    if value and pattern and not re.fullmatch(pattern, value):
        raise serializers.ValidationError('School ID number has an invalid format.', code='invalid')
    return value


class SchoolIdField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault('max_length', 64)
        super().__init__(**kwargs)
        self.validators.append(validate_school_id)
