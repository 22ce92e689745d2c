from django.conf import settings
from rest_framework import serializers

from clinic.serializers.fields import CleanCharField


def validate_upload(f):
    """Enforce ``UPLOAD_MAX_MB`` and ``ALLOWED_UPLOAD_TYPES`` on an uploaded file."""
    max_bytes = settings.UPLOAD_MAX_MB * 1024 * 1024
    if f.size > max_bytes:
        raise serializers.ValidationError(f'File too large (max {settings.UPLOAD_MAX_MB} MB).', code='invalid')
    content_type = getattr(f, 'content_type', '') or ''
    if not any(content_type.startswith(t) for t in settings.ALLOWED_UPLOAD_TYPES):
        raise serializers.ValidationError(f'Unsupported file type: {content_type or "unknown"}.', code='invalid')
    return f


class AnnouncementSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    title = CleanCharField(max_length=255)
    description = CleanCharField()
    image = serializers.FileField(required=False, validators=[validate_upload])
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
