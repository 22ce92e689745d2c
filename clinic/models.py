"""
Database models for the campus clinic backend.

Each clinic collection (requests, registrations, medical records,
inventory, announcements) is stored as a flat document keyed by an
opaque generated id.  No foreign keys link the clinic documents to each
other: a medical record belongs to a student only through the
``school_id_number`` string that staff typed in.
"""
from __future__ import annotations

import os
import secrets
import string
import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone

DOCUMENT_ID_ALPHABET = string.ascii_letters + string.digits
DOCUMENT_ID_LENGTH = 20


def generate_document_id() -> str:
    """Return a random 20 character id in the style of the old document store."""
    return ''.join(secrets.choice(DOCUMENT_ID_ALPHABET) for _ in range(DOCUMENT_ID_LENGTH))


def _announcement_upload(instance, filename: str) -> str:
    ext = os.path.splitext(filename)[1].lower()
    return f"announcements/{timezone.now().strftime('%Y/%m')}/{uuid.uuid4().hex}{ext}"


class User(AbstractUser):
    """Clinic back-office account.

    ``admin`` accounts manage everything; ``staff`` accounts are nurses
    and clinic personnel with the same API access.
    """
    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('staff', 'Clinic staff'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='staff')

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Document(models.Model):
    """Abstract base for clinic documents.

    ``created_at`` and ``updated_at`` are stamped from a single clock
    reading when the document is first saved, so a fresh document always
    has equal timestamps.  Later writes must set ``updated_at``
    explicitly (see :meth:`touch`).
    """
    id = models.CharField(
        max_length=DOCUMENT_ID_LENGTH,
        primary_key=True,
        default=generate_document_id,
        editable=False,
    )
    created_at = models.DateTimeField(db_index=True, editable=False)
    updated_at = models.DateTimeField()

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        if self._state.adding and self.created_at is None:
            now = timezone.now()
            self.created_at = now
            self.updated_at = now
        elif self.updated_at is None:
            self.updated_at = timezone.now()
        super().save(*args, **kwargs)

    def touch(self) -> None:
        self.updated_at = timezone.now()


class RequestForm(Document):
    """A request form submitted from the public site (medical certificate,
    medication, referral...)."""
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
        ('processing', 'Processing'),
    ]
    fullname = models.CharField(max_length=255)
    year_section = models.CharField(max_length=64)
    school_id_number = models.CharField(max_length=64, db_index=True)
    department_course = models.CharField(max_length=255)
    # Free text; reports group it by exact value
    assessment = models.CharField(max_length=255)
    referred_to = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)

    class Meta(Document.Meta):
        verbose_name = 'request form'

    def __str__(self) -> str:
        return f"{self.fullname}: {self.assessment} ({self.status})"


class Registration(Document):
    """A student registered with the clinic."""
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]
    fullname = models.CharField(max_length=255)
    student_id_lrn = models.CharField(max_length=64, blank=True)
    school_id_number = models.CharField(max_length=64, db_index=True)
    department_course = models.CharField(max_length=255)
    year_section = models.CharField(max_length=64)
    contact_number = models.CharField(max_length=32, blank=True)
    form_to_request = models.CharField(max_length=255, blank=True)
    purpose = models.TextField(blank=True)
    # Health-history questionnaire answers keyed by question
    health_history = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active', db_index=True)

    def __str__(self) -> str:
        return f"{self.fullname} ({self.school_id_number})"


class MedicalRecord(Document):
    """One clinic visit.  Records are appended, never edited by the API."""
    VISIT_TYPE_CHOICES = [
        ('Check-up', 'Check-up'),
        ('Emergency', 'Emergency'),
        ('Follow-up', 'Follow-up'),
        ('Medication request', 'Medication request'),
    ]
    # Student information
    student_id = models.CharField(max_length=64, blank=True, db_index=True)
    school_id_number = models.CharField(max_length=64, db_index=True)
    fullname = models.CharField(max_length=255)
    first_name = models.CharField(max_length=100, blank=True)
    middle_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    department = models.CharField(max_length=255, blank=True)
    year_section = models.CharField(max_length=64, blank=True)

    # Visit details
    visit_date = models.DateField()
    visit_time = models.CharField(max_length=16, blank=True)
    reason_for_visit = models.TextField()
    visit_type = models.CharField(max_length=32, choices=VISIT_TYPE_CHOICES)

    # Vital signs, recorded as typed (units vary by nurse)
    temperature = models.CharField(max_length=32, blank=True)
    blood_pressure = models.CharField(max_length=32, blank=True)
    heart_rate = models.CharField(max_length=32, blank=True)
    respiratory_rate = models.CharField(max_length=32, blank=True)
    weight = models.CharField(max_length=32, blank=True)
    height = models.CharField(max_length=32, blank=True)

    # Medical assessment
    initial_assessment = models.TextField(blank=True)
    diagnosis = models.TextField(blank=True)
    symptoms_observed = models.TextField(blank=True)
    allergies = models.TextField(blank=True)
    existing_medical_conditions = models.TextField(blank=True)

    # Treatment / action taken
    medication_given = models.TextField(blank=True)
    first_aid_provided = models.TextField(blank=True)
    procedures_done = models.TextField(blank=True)
    advice_given = models.TextField(blank=True)
    sent_home = models.CharField(max_length=16, blank=True)
    parent_notified = models.CharField(max_length=16, blank=True)

    # Referral
    referred_to = models.CharField(max_length=255, blank=True)
    referral_reason = models.TextField(blank=True)
    referral_time = models.CharField(max_length=16, blank=True)
    transport_assistance = models.CharField(max_length=64, blank=True)

    # Attending personnel
    attending_personnel_name = models.CharField(max_length=255)
    attending_personnel_id = models.CharField(max_length=64, blank=True)
    additional_remarks = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"{self.fullname} {self.visit_date:%Y-%m-%d} ({self.visit_type})"


class InventoryItem(Document):
    """Stock of a medication or supply.

    ``quantity`` is a positive integer column, so the database itself
    rejects a negative stock level.
    """
    name = models.CharField(max_length=255)
    # Free text (Medications, Medical Supplies, First Aid...)
    category = models.CharField(max_length=64, db_index=True)
    quantity = models.PositiveIntegerField(default=0)
    unit = models.CharField(max_length=32, default='pcs')
    expiration_date = models.DateField()
    delivery_date = models.DateField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity} {self.unit}"


class Announcement(Document):
    """Public announcement shown on the landing page."""
    title = models.CharField(max_length=255)
    description = models.TextField()
    image = models.FileField(upload_to=_announcement_upload, max_length=512, blank=True)

    def __str__(self) -> str:
        return self.title[:30]


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='clinic_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='clinic_audit_object_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.object_type}/{self.object_id}"
