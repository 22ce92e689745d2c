"""
Django admin registrations for the clinic models.

The SPA is the everyday back office; ``/admin/`` is for superusers who
need to inspect or correct a document by hand.
"""

from django.contrib import admin

from .models import (
    User,
    RequestForm,
    Registration,
    MedicalRecord,
    InventoryItem,
    Announcement,
    AuditEvent,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'is_active', 'is_staff', 'is_superuser')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'first_name', 'last_name')


@admin.register(RequestForm)
class RequestFormAdmin(admin.ModelAdmin):
    list_display = ('id', 'fullname', 'school_id_number', 'assessment', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('fullname', 'school_id_number', 'assessment')


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ('id', 'fullname', 'school_id_number', 'department_course', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('fullname', 'school_id_number', 'student_id_lrn')


@admin.register(MedicalRecord)
class MedicalRecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'fullname', 'school_id_number', 'visit_date', 'visit_type', 'attending_personnel_name')
    list_filter = ('visit_type',)
    search_fields = ('fullname', 'school_id_number', 'student_id', 'diagnosis')
    date_hierarchy = 'visit_date'


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'category', 'quantity', 'unit', 'expiration_date')
    list_filter = ('category',)
    search_fields = ('name',)


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'created_at')
    search_fields = ('title', 'description')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'action', 'object_type', 'object_id', 'user')
    list_filter = ('action', 'object_type')
    search_fields = ('object_id', 'user__username')
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
