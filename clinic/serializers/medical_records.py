from rest_framework import serializers

from clinic.models import MedicalRecord
from clinic.serializers.fields import CleanCharField, RequiredChoiceField, RequiredDateField, SchoolIdField


def _text(source, max_length=None):
    kwargs = {'required': False, 'allow_blank': True}
    if source:
        kwargs['source'] = source
    if max_length:
        kwargs['max_length'] = max_length
    return serializers.CharField(**kwargs)


class MedicalRecordSerializer(serializers.Serializer):
    """A clinic visit as filled in on the admin medical record form.

    Either ``schoolIdNumber`` or ``studentId`` identifies the student; when
    only the latter is given it is stored as the school ID as well, so
    lookups by either key find the record.
    """
    id = serializers.CharField(read_only=True)

    # Student information
    studentId = _text('student_id', 64)
    schoolIdNumber = SchoolIdField(source='school_id_number', required=False, allow_blank=True)
    fullname = CleanCharField(max_length=255)
    firstName = _text('first_name', 100)
    middleName = _text('middle_name', 100)
    lastName = _text('last_name', 100)
    department = _text(None, 255)
    yearSection = _text('year_section', 64)

    # Visit details
    visitDate = RequiredDateField(source='visit_date')
    visitTime = _text('visit_time', 16)
    reasonForVisit = CleanCharField(source='reason_for_visit')
    visitType = RequiredChoiceField(source='visit_type', choices=MedicalRecord.VISIT_TYPE_CHOICES)

    # Vital signs
    temperature = _text(None, 32)
    bloodPressure = _text('blood_pressure', 32)
    heartRate = _text('heart_rate', 32)
    respiratoryRate = _text('respiratory_rate', 32)
    weight = _text(None, 32)
    height = _text(None, 32)

    # Medical assessment
    initialAssessment = _text('initial_assessment')
    diagnosis = _text(None)
    symptomsObserved = _text('symptoms_observed')
    allergies = _text(None)
    existingMedicalConditions = _text('existing_medical_conditions')

    # Treatment / action taken
    medicationGiven = _text('medication_given')
    firstAidProvided = _text('first_aid_provided')
    proceduresDone = _text('procedures_done')
    adviceGiven = _text('advice_given')
    sentHome = _text('sent_home', 16)
    parentNotified = _text('parent_notified', 16)

    # Referral
    referredTo = _text('referred_to', 255)
    referralReason = _text('referral_reason')
    referralTime = _text('referral_time', 16)
    transportAssistance = _text('transport_assistance', 64)

    # Attending personnel
    attendingPersonnelName = CleanCharField(source='attending_personnel_name', max_length=255)
    attendingPersonnelId = _text('attending_personnel_id', 64)
    additionalRemarks = _text('additional_remarks')

    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    def validate(self, attrs):
        school_id = attrs.get('school_id_number') or ''
        student_id = attrs.get('student_id') or ''
        if not school_id and not student_id:
            raise serializers.ValidationError(
                {'schoolIdNumber': 'Either schoolIdNumber or studentId is required.'}, code='required')
        if not school_id:
            attrs['school_id_number'] = student_id
        return attrs


class MedicalRecordListQuerySerializer(serializers.Serializer):
    studentId = serializers.CharField(required=False, allow_blank=True)
    schoolIdNumber = serializers.CharField(required=False, allow_blank=True)
