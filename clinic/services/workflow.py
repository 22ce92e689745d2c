"""
Status workflows for request forms and student registrations.

A workflow is a fixed set of states plus a transition table listing the
allowed target states for each source state.  Request forms run with a
permissive table by default (any status may be set from any status, as
the clinic staff have always been able to); ``REQUEST_WORKFLOW=strict``
switches to the approve/reject/reopen flow of the admin screen.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Type

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from clinic.exceptions import InvalidStatus, InvalidTransition
from clinic.models import Document, RequestForm, Registration
from clinic.services.audit import log_action


@dataclass(frozen=True)
class StatusWorkflow:
    name: str
    states: tuple[str, ...]
    initial: str
    transitions: Mapping[str, frozenset[str]]

    def check_state(self, value) -> str:
        if not isinstance(value, str) or value not in self.states:
            raise InvalidStatus(value, self.states)
        return value

    def can_transition(self, current: str, new: str) -> bool:
        return new in self.transitions.get(current, frozenset())


def _all_to_all(states: tuple[str, ...]) -> dict[str, frozenset[str]]:
    return {s: frozenset(states) for s in states}


REQUEST_STATES = tuple(value for value, _ in RequestForm.STATUS_CHOICES)
REGISTRATION_STATES = tuple(value for value, _ in Registration.STATUS_CHOICES)

PERMISSIVE_REQUEST_WORKFLOW = StatusWorkflow(
    name='request',
    states=REQUEST_STATES,
    initial='pending',
    transitions=_all_to_all(REQUEST_STATES),
)

STRICT_REQUEST_WORKFLOW = StatusWorkflow(
    name='request',
    states=REQUEST_STATES,
    initial='pending',
    transitions={
        'pending': frozenset({'approved', 'rejected', 'processing'}),
        'processing': frozenset({'approved', 'rejected', 'pending'}),
        'approved': frozenset({'pending'}),
        'rejected': frozenset({'pending'}),
    },
)

REGISTRATION_WORKFLOW = StatusWorkflow(
    name='registration',
    states=REGISTRATION_STATES,
    initial='active',
    transitions=_all_to_all(REGISTRATION_STATES),
)


def request_workflow() -> StatusWorkflow:
    if settings.REQUEST_WORKFLOW == 'strict':
        return STRICT_REQUEST_WORKFLOW
    return PERMISSIVE_REQUEST_WORKFLOW


def apply_transition(obj: Document, new_status: str, *, workflow: StatusWorkflow) -> str:
    """Move a locked ``obj`` to ``new_status`` in memory; return the old status."""
    old_status = obj.status
    if not workflow.can_transition(old_status, new_status):
        raise InvalidTransition(f'Cannot change {workflow.name} status from {old_status} to {new_status}')
    obj.status = new_status
    obj.updated_at = timezone.now()
    return old_status


def log_transition(obj: Document, old_status: str, *, workflow: StatusWorkflow, user=None) -> None:
    log_action(
        user=user,
        action=f'{workflow.name}_status',
        object_type=workflow.name,
        object_id=obj.pk,
        detail={'from': old_status, 'to': obj.status},
    )


def update_status(model: Type[Document], pk: str, new_status, *, workflow: StatusWorkflow, user=None) -> Document:
    """Set ``status`` on the document ``pk`` of ``model``.

    The value is checked against the workflow before the store is read,
    so an invalid status never touches the document.  The row is locked
    while the transition table is consulted.
    """
    new_status = workflow.check_state(new_status)
    with transaction.atomic():
        obj: Optional[Document] = model.objects.select_for_update().filter(pk=pk).first()
        if obj is None:
            raise NotFound(f'{model._meta.verbose_name.capitalize()} not found')
        old_status = apply_transition(obj, new_status, workflow=workflow)
        obj.save(update_fields=['status', 'updated_at'])
    log_transition(obj, old_status, workflow=workflow, user=user)
    return obj
