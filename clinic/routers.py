"""
URL mappings for the clinic API.

Paths match the ones the SPA calls.  Trailing slashes are deliberately
omitted (``APPEND_SLASH`` is off).
"""
from django.urls import include, path

from .auth_views import login_view, logout_view, me_view, refresh_view
from .views.announcements import announcement_detail, announcements_collection
from .views.health import healthz
from .views.inventory import inventory_by_category, inventory_collection, inventory_detail, inventory_reduce
from .views.medical_records import medical_record_detail, medical_records_collection
from .views.registrations import registration_detail, registrations_collection
from .views.reports import medication_report
from .views.requests import request_status, requests_collection

urlpatterns = [
    # Auth
    path('api/auth/login', login_view, name='auth-login'),
    path('api/auth/refresh', refresh_view, name='auth-refresh'),
    path('api/auth/logout', logout_view, name='auth-logout'),
    path('api/auth/me', me_view, name='auth-me'),

    # Request forms
    path('api/requests', requests_collection, name='requests'),
    path('api/requests/<str:pk>/status', request_status, name='request-status'),

    # Inventory
    path('api/inventory', inventory_collection, name='inventory'),
    path('api/inventory/category/<str:category>', inventory_by_category, name='inventory-category'),
    path('api/inventory/<str:pk>', inventory_detail, name='inventory-detail'),
    path('api/inventory/<str:pk>/quantity', inventory_reduce, name='inventory-quantity'),

    # Registrations
    path('api/registrations', registrations_collection, name='registrations'),
    path('api/registrations/<str:pk>', registration_detail, name='registration-detail'),

    # Medical records
    path('api/medical-records', medical_records_collection, name='medical-records'),
    path('api/medical-records/<str:pk>', medical_record_detail, name='medical-record-detail'),

    # Reports
    path('api/reports/medication', medication_report, name='report-medication'),

    # Announcements
    path('api/announcement', announcements_collection, name='announcements'),
    path('api/announcement/<str:pk>', announcement_detail, name='announcement-detail'),

    # Ops
    path('health', healthz, name='health'),
    path('', include('django_prometheus.urls')),
]
