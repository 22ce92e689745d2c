"""
Integration tests for the clinic API.

These tests exercise request form submission, registrations and medical
records through the HTTP layer, using Django REST framework's
APIClient within the APITestCase base class.
"""

from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from ..models import AuditEvent, MedicalRecord, Registration, RequestForm, User

REQUEST_PAYLOAD = {
    'fullname': 'Juan Dela Cruz',
    'yearSection': '2-A',
    'schoolIdNumber': '2023-00012',
    'departmentCourse': 'BSIT',
    'assessment': 'Paracetamol',
    'referredTo': 'School Physician',
}

REGISTRATION_PAYLOAD = {
    'fullname': 'Maria Santos',
    'schoolIdNumber': '2022-00450',
    'departmentCourse': 'BSN',
    'yearSection': '3-B',
    'contactNumber': '09171234567',
    'healthHistory': {'asthma': True, 'allergies': 'Penicillin'},
}


class ClinicAPITests(APITestCase):
    def setUp(self) -> None:
        cache.clear()
        self.admin = User.objects.create_user(username='nurse1', password='Nurse!Pass1', role='staff')

    def authenticate(self, user: User) -> APIClient:
        """Return an authenticated APIClient for the given user."""
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    # --- request forms -------------------------------------------------

    def test_public_request_submission_starts_pending(self):
        response = self.client.post(reverse('requests'), REQUEST_PAYLOAD, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        data = response.data['data']
        self.assertEqual(data['status'], 'pending')
        self.assertEqual(data['createdAt'], data['updatedAt'])
        self.assertEqual(len(data['id']), 20)

        stored = RequestForm.objects.get(pk=data['id'])
        self.assertEqual(stored.status, 'pending')
        self.assertEqual(stored.created_at, stored.updated_at)
        self.assertEqual(stored.school_id_number, '2023-00012')

    def test_request_submission_lists_every_missing_field(self):
        payload = dict(REQUEST_PAYLOAD, assessment='', referredTo='   ')
        payload.pop('yearSection')
        response = self.client.post(reverse('requests'), payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['code'], 'missing_field')
        self.assertCountEqual(response.data['fields'], ['yearSection', 'assessment', 'referredTo'])
        self.assertEqual(RequestForm.objects.count(), 0)

    def test_request_list_requires_clinic_account(self):
        RequestForm.objects.create(**{
            'fullname': 'A', 'year_section': '1-A', 'school_id_number': 'X1',
            'department_course': 'BSIT', 'assessment': 'Ibuprofen', 'referred_to': 'None',
        })
        response = self.client.get(reverse('requests'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        response = self.authenticate(self.admin).get(reverse('requests'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['data']), 1)

    def test_request_list_is_newest_first_and_filters_by_status(self):
        client = self.authenticate(self.admin)
        first = client.post(reverse('requests'), REQUEST_PAYLOAD, format='json').data['data']
        second = client.post(reverse('requests'), dict(REQUEST_PAYLOAD, assessment='Ibuprofen'), format='json').data['data']
        client.patch(reverse('request-status', args=[first['id']]), {'status': 'approved'}, format='json')

        ids = [r['id'] for r in client.get(reverse('requests')).data['data']]
        self.assertEqual(ids, [second['id'], first['id']])

        approved = client.get(reverse('requests'), {'status': 'approved'}).data['data']
        self.assertEqual([r['id'] for r in approved], [first['id']])

        response = client.get(reverse('requests'), {'status': 'archived'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_status')

    def test_status_update_is_audited(self):
        client = self.authenticate(self.admin)
        created = client.post(reverse('requests'), REQUEST_PAYLOAD, format='json').data['data']
        response = client.patch(reverse('request-status', args=[created['id']]), {'status': 'processing'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['status'], 'processing')

        event = AuditEvent.objects.get(action='request_status')
        self.assertEqual(event.object_id, created['id'])
        self.assertEqual(event.detail, {'from': 'pending', 'to': 'processing'})
        self.assertEqual(event.user, self.admin)

    # --- registrations -------------------------------------------------

    def test_registration_create_and_fetch(self):
        client = self.authenticate(self.admin)
        response = client.post(reverse('registrations'), REGISTRATION_PAYLOAD, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data['data']
        self.assertEqual(data['status'], 'active')
        self.assertEqual(data['healthHistory'], {'asthma': True, 'allergies': 'Penicillin'})

        detail = client.get(reverse('registration-detail', args=[data['id']]))
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        self.assertEqual(detail.data['data']['fullname'], 'Maria Santos')

    def test_registration_update_fields_and_status_together(self):
        client = self.authenticate(self.admin)
        created = client.post(reverse('registrations'), REGISTRATION_PAYLOAD, format='json').data['data']
        response = client.put(
            reverse('registration-detail', args=[created['id']]),
            {'yearSection': '4-B', 'status': 'inactive'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        reg = Registration.objects.get(pk=created['id'])
        self.assertEqual(reg.year_section, '4-B')
        self.assertEqual(reg.status, 'inactive')
        self.assertEqual(reg.fullname, 'Maria Santos')
        self.assertGreaterEqual(reg.updated_at, reg.created_at)

        inactive = client.get(reverse('registrations'), {'status': 'inactive'}).data['data']
        self.assertEqual([r['id'] for r in inactive], [created['id']])

    def test_registration_invalid_status_changes_nothing(self):
        client = self.authenticate(self.admin)
        created = client.post(reverse('registrations'), REGISTRATION_PAYLOAD, format='json').data['data']
        response = client.put(
            reverse('registration-detail', args=[created['id']]),
            {'yearSection': '4-B', 'status': 'graduated'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_status')
        self.assertEqual(response.data['allowed'], ['active', 'inactive'])
        reg = Registration.objects.get(pk=created['id'])
        self.assertEqual((reg.status, reg.year_section), ('active', '3-B'))

    def test_registration_unknown_id(self):
        client = self.authenticate(self.admin)
        response = client.put(reverse('registration-detail', args=['nope']), {'status': 'inactive'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Registration not found')

    def test_registration_missing_fields(self):
        client = self.authenticate(self.admin)
        response = client.post(reverse('registrations'), {'fullname': 'Only Name'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertCountEqual(response.data['fields'], ['schoolIdNumber', 'departmentCourse', 'yearSection'])

    # --- medical records -----------------------------------------------

    def _record(self, **overrides):
        payload = {
            'fullname': 'Maria Santos',
            'schoolIdNumber': '2022-00450',
            'visitDate': '2024-03-04',
            'visitTime': '09:15',
            'visitType': 'Check-up',
            'reasonForVisit': 'Headache',
            'temperature': '37.8',
            'medicationGiven': 'Paracetamol',
            'attendingPersonnelName': 'Nurse Joy',
        }
        payload.update(overrides)
        return payload

    def test_medical_record_create_and_lookup_by_school_id(self):
        client = self.authenticate(self.admin)
        response = client.post(reverse('medical-records'), self._record(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        record_id = response.data['data']['id']
        self.assertEqual(response.data['data']['visitDate'], '2024-03-04')

        client.post(reverse('medical-records'), self._record(schoolIdNumber='2021-00001', fullname='Other'), format='json')

        found = client.get(reverse('medical-records'), {'schoolIdNumber': '2022-00450'}).data['data']
        self.assertEqual([r['id'] for r in found], [record_id])
        self.assertEqual(len(client.get(reverse('medical-records')).data['data']), 2)

        detail = client.get(reverse('medical-record-detail', args=[record_id]))
        self.assertEqual(detail.data['data']['temperature'], '37.8')

    def test_medical_record_with_student_id_only(self):
        client = self.authenticate(self.admin)
        response = client.post(
            reverse('medical-records'),
            self._record(schoolIdNumber='', studentId='S-778'),
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        record = MedicalRecord.objects.get(pk=response.data['data']['id'])
        self.assertEqual(record.school_id_number, 'S-778')

        found = client.get(reverse('medical-records'), {'studentId': 'S-778'}).data['data']
        self.assertEqual(len(found), 1)

    def test_medical_record_requires_an_identifier(self):
        client = self.authenticate(self.admin)
        response = client.post(reverse('medical-records'), self._record(schoolIdNumber=''), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'missing_field')
        self.assertEqual(response.data['fields'], ['schoolIdNumber'])

    def test_medical_record_rejects_unknown_visit_type_and_bad_date(self):
        client = self.authenticate(self.admin)
        response = client.post(reverse('medical-records'), self._record(visitType='Surgery'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_value')

        response = client.post(reverse('medical-records'), self._record(visitDate='04/31/2024'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_value')
        self.assertEqual(MedicalRecord.objects.count(), 0)

    def test_medical_record_unknown_id(self):
        response = self.authenticate(self.admin).get(reverse('medical-record-detail', args=['missing']))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 'not_found')

    # --- ops -----------------------------------------------------------

    def test_health(self):
        response = self.client.get(reverse('health'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'ok', 'db': True})
