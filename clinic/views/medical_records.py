"""
Medical record (clinic visit) endpoints.

Records are only ever appended.  A student's history is found by
matching the school ID (or student ID) typed on each visit; there is no
link to the registration document.
"""
from __future__ import annotations

from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated

from clinic.models import MedicalRecord
from clinic.permissions import IsAdminRole
from clinic.responses import ok
from clinic.serializers.medical_records import MedicalRecordListQuerySerializer, MedicalRecordSerializer
from clinic.services.audit import log_action


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def medical_records_collection(request):
    if request.method == 'POST':
        s = MedicalRecordSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        obj = MedicalRecord.objects.create(**s.validated_data)
        log_action(user=request.user, action='medical_record_create', object_type='medical_record',
                   object_id=obj.pk, detail={'schoolIdNumber': obj.school_id_number, 'visitType': obj.visit_type})
        return ok(MedicalRecordSerializer(obj).data, message='Medical record saved',
                  status=status.HTTP_201_CREATED)

    q = MedicalRecordListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    keys = [v.strip() for v in (q.validated_data.get('studentId'), q.validated_data.get('schoolIdNumber')) if v and v.strip()]
    qs = MedicalRecord.objects.all()
    if keys:
        qs = qs.filter(Q(student_id__in=keys) | Q(school_id_number__in=keys))
    return ok(MedicalRecordSerializer(qs, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def medical_record_detail(request, pk: str):
    obj = MedicalRecord.objects.filter(pk=pk).first()
    if obj is None:
        raise NotFound('Medical record not found')
    return ok(MedicalRecordSerializer(obj).data)
