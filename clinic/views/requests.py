"""
Request form endpoints.

Students submit request forms from the public site without an account;
clinic staff list them and move them through the status workflow.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.throttling import AnonRateThrottle, UserRateThrottle

from clinic.models import RequestForm
from clinic.permissions import IsAdminOrCreateOnly, IsAdminRole
from clinic.responses import ok
from clinic.serializers.requests import RequestFormSerializer, RequestListQuerySerializer, StatusSerializer
from clinic.services.audit import log_action
from clinic.services.workflow import request_workflow, update_status
from clinic.throttling import PublicFormThrottle


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrCreateOnly])
@throttle_classes([AnonRateThrottle, UserRateThrottle, PublicFormThrottle])
def requests_collection(request):
    if request.method == 'POST':
        return _create_request(request)

    q = RequestListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = RequestForm.objects.all()
    wanted = q.validated_data.get('status')
    if wanted:
        qs = qs.filter(status=request_workflow().check_state(wanted))
    return ok(RequestFormSerializer(qs, many=True).data)


def _create_request(request):
    s = RequestFormSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    obj = RequestForm.objects.create(**s.validated_data)
    log_action(user=request.user, action='request_create', object_type='request', object_id=obj.pk,
               detail={'assessment': obj.assessment, 'ip': request.META.get('REMOTE_ADDR')})
    return ok(RequestFormSerializer(obj).data, message='Request submitted successfully',
              status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def request_status(request, pk: str):
    """Set the status of one request form.

    Body: ``{"status": "approved"}``.  Unknown statuses are refused
    before the request is looked up.
    """
    s = StatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    obj = update_status(RequestForm, pk, s.validated_data['status'],
                        workflow=request_workflow(), user=request.user)
    return ok(RequestFormSerializer(obj).data, message=f'Request {obj.status}')
