from rest_framework import serializers

from clinic.serializers.fields import CleanCharField, SchoolIdField


class RequestFormSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    fullname = CleanCharField(max_length=255)
    yearSection = serializers.CharField(source='year_section', max_length=64)
    schoolIdNumber = SchoolIdField(source='school_id_number')
    departmentCourse = serializers.CharField(source='department_course', max_length=255)
    assessment = serializers.CharField(max_length=255)
    referredTo = serializers.CharField(source='referred_to', max_length=255)
    status = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)


class RequestListQuerySerializer(serializers.Serializer):
    status = serializers.CharField(required=False, allow_blank=True)


class StatusSerializer(serializers.Serializer):
    # Checked against the workflow by the view, so any string gets through
    status = serializers.CharField()
