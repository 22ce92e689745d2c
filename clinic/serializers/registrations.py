from rest_framework import serializers

from clinic.serializers.fields import CleanCharField, SchoolIdField


class RegistrationSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    fullname = CleanCharField(max_length=255)
    studentIdLrn = serializers.CharField(source='student_id_lrn', max_length=64, required=False, allow_blank=True)
    schoolIdNumber = SchoolIdField(source='school_id_number')
    departmentCourse = serializers.CharField(source='department_course', max_length=255)
    yearSection = serializers.CharField(source='year_section', max_length=64)
    contactNumber = serializers.CharField(source='contact_number', max_length=32, required=False, allow_blank=True)
    formToRequest = serializers.CharField(source='form_to_request', max_length=255, required=False, allow_blank=True)
    purpose = CleanCharField(required=False, allow_blank=True)
    healthHistory = serializers.DictField(source='health_history', required=False)
    status = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)


class RegistrationListQuerySerializer(serializers.Serializer):
    status = serializers.CharField(required=False, allow_blank=True)
