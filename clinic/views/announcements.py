"""
Announcement endpoints.

Anyone can read announcements (they are shown on the public landing
page); clinic accounts create, edit and delete them.  Images arrive as
multipart uploads and are stored under ``MEDIA_ROOT/announcements``.
"""
from __future__ import annotations

import logging

from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated

from clinic.models import Announcement
from clinic.permissions import IsAdminOrReadOnly, IsAdminRole
from clinic.responses import ok
from clinic.serializers.announcements import AnnouncementSerializer
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)


def _remove_file(name: str) -> None:
    if not name:
        return
    storage = Announcement._meta.get_field('image').storage
    try:
        storage.delete(name)
    except OSError as e:
        logger.warning('Could not delete announcement image %s: %s', name, e)


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def announcements_collection(request):
    ctx = {'request': request}
    if request.method == 'POST':
        s = AnnouncementSerializer(data=request.data, context=ctx)
        s.is_valid(raise_exception=True)
        obj = Announcement.objects.create(**s.validated_data)
        log_action(user=request.user, action='announcement_create', object_type='announcement',
                   object_id=obj.pk, detail={'title': obj.title, 'image': bool(obj.image)})
        return ok(AnnouncementSerializer(obj, context=ctx).data, message='Announcement posted',
                  status=status.HTTP_201_CREATED)

    return ok(AnnouncementSerializer(Announcement.objects.all(), many=True, context=ctx).data)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def announcement_detail(request, pk: str):
    ctx = {'request': request}
    if request.method == 'DELETE':
        obj = Announcement.objects.filter(pk=pk).first()
        if obj is None:
            raise NotFound('Announcement not found')
        image_name = obj.image.name
        obj.delete()
        _remove_file(image_name)
        log_action(user=request.user, action='announcement_delete', object_type='announcement',
                   object_id=pk, detail={'title': obj.title})
        return ok(message='Announcement deleted')

    s = AnnouncementSerializer(data=request.data, partial=True, context=ctx)
    s.is_valid(raise_exception=True)
    changes = dict(s.validated_data)
    replaced = None
    with transaction.atomic():
        obj = Announcement.objects.select_for_update().filter(pk=pk).first()
        if obj is None:
            raise NotFound('Announcement not found')
        if 'image' in changes:
            replaced = obj.image.name
        for field, value in changes.items():
            setattr(obj, field, value)
        obj.touch()
        obj.save()
    if replaced and replaced != obj.image.name:
        _remove_file(replaced)
    log_action(user=request.user, action='announcement_update', object_type='announcement',
               object_id=obj.pk, detail={'fields': sorted(changes)})
    return ok(AnnouncementSerializer(obj, context=ctx).data, message='Announcement updated')
