"""
Student registration endpoints (admin only).
"""
from __future__ import annotations

from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated

from clinic.models import Registration
from clinic.permissions import IsAdminRole
from clinic.responses import ok
from clinic.serializers.registrations import RegistrationListQuerySerializer, RegistrationSerializer
from clinic.services.audit import log_action
from clinic.services.workflow import REGISTRATION_WORKFLOW, apply_transition, log_transition


def _get_registration_or_404(pk: str) -> Registration:
    obj = Registration.objects.filter(pk=pk).first()
    if obj is None:
        raise NotFound('Registration not found')
    return obj


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def registrations_collection(request):
    if request.method == 'POST':
        s = RegistrationSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        obj = Registration.objects.create(**s.validated_data)
        log_action(user=request.user, action='registration_create', object_type='registration',
                   object_id=obj.pk, detail={'schoolIdNumber': obj.school_id_number})
        return ok(RegistrationSerializer(obj).data, message='Registration created',
                  status=status.HTTP_201_CREATED)

    q = RegistrationListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = Registration.objects.all()
    wanted = q.validated_data.get('status')
    if wanted:
        qs = qs.filter(status=REGISTRATION_WORKFLOW.check_state(wanted))
    return ok(RegistrationSerializer(qs, many=True).data)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def registration_detail(request, pk: str):
    """Read or update one registration.

    PUT accepts any subset of the registration fields and, optionally,
    ``status``; both are applied in one write.
    """
    if request.method == 'GET':
        return ok(RegistrationSerializer(_get_registration_or_404(pk)).data)

    s = RegistrationSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    changes = dict(s.validated_data)
    new_status = None
    if 'status' in request.data:
        new_status = REGISTRATION_WORKFLOW.check_state(request.data.get('status'))

    old_status = None
    with transaction.atomic():
        obj = Registration.objects.select_for_update().filter(pk=pk).first()
        if obj is None:
            raise NotFound('Registration not found')
        for field, value in changes.items():
            setattr(obj, field, value)
        if new_status is not None:
            old_status = apply_transition(obj, new_status, workflow=REGISTRATION_WORKFLOW)
        obj.touch()
        obj.save()

    if new_status is not None:
        log_transition(obj, old_status, workflow=REGISTRATION_WORKFLOW, user=request.user)
    if changes:
        log_action(user=request.user, action='registration_update', object_type='registration',
                   object_id=obj.pk, detail={'fields': sorted(changes)})
    return ok(RegistrationSerializer(obj).data, message='Registration updated')
