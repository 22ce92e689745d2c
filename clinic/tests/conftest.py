import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from clinic.models import User


@pytest.fixture(autouse=True)
def _reset_throttles():
    # throttle counters live in the cache and would leak between tests
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clinic_admin(db):
    return User.objects.create_user(username='clinic_admin', password='Adm1n!Pass', role='admin')


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def staff_client(clinic_admin):
    client = APIClient()
    client.force_authenticate(user=clinic_admin)
    return client


@pytest.fixture
def media_root(tmp_path, settings):
    settings.MEDIA_ROOT = tmp_path
    return tmp_path
