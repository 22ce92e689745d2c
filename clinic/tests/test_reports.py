import datetime

import pytest
from django.urls import reverse
from django.utils import timezone

from clinic.models import Registration, RequestForm
from clinic.services.periods import coerce_datetime, in_period, month_key
from clinic.services.reports import build_report


@pytest.fixture(autouse=True)
def manila(settings):
    settings.TIME_ZONE = 'Asia/Manila'


def req(created, assessment='Paracetamol', dept='BSIT', school_id='S1'):
    return {'createdAt': created, 'assessment': assessment, 'departmentCourse': dept, 'schoolIdNumber': school_id}


def reg(created, dept='BSIT', school_id='S1'):
    return {'createdAt': created, 'departmentCourse': dept, 'schoolIdNumber': school_id}


def test_month_filter_keeps_only_that_month():
    report = build_report(
        [req('2024-01-15T10:00:00+08:00'), req('2024-02-01T10:00:00+08:00')],
        [], 2024, 1,
    )
    assert report['totalRequests'] == 1
    assert report['monthlyData'] == [{'month': '2024-01', 'requests': 1, 'registrations': 0, 'total': 1}]


def test_year_report_is_chronological():
    report = build_report(
        [req('2024-03-02T09:00:00+08:00'), req('2024-01-05T09:00:00+08:00'), req('2023-12-31T09:00:00+08:00')],
        [reg('2024-03-10T09:00:00+08:00', school_id='S2')],
        2024,
    )
    assert [m['month'] for m in report['monthlyData']] == ['2024-01', '2024-03']
    assert report['monthlyData'][1] == {'month': '2024-03', 'requests': 1, 'registrations': 1, 'total': 2}
    assert report['totalRequests'] == 2
    assert report['totalRegistrations'] == 1


def test_assessment_buckets_are_case_sensitive():
    created = '2024-05-05T12:00:00+08:00'
    report = build_report(
        [req(created, 'Paracetamol'), req(created, 'paracetamol'), req(created, 'Paracetamol')],
        [], 2024,
    )
    assert report['medicationData'] == [
        {'medication': 'Paracetamol', 'requests': 2},
        {'medication': 'paracetamol', 'requests': 1},
    ]
    assert report['assessmentData'] == [
        {'assessment': 'Paracetamol', 'count': 2},
        {'assessment': 'paracetamol', 'count': 1},
    ]


def test_ties_keep_first_seen_order_and_blanks_are_skipped():
    created = '2024-05-05T12:00:00+08:00'
    report = build_report(
        [req(created, 'Ibuprofen', dept=''), req(created, 'Cetirizine', dept='  '), req(created, '', dept='BSN')],
        [], 2024,
    )
    assert [m['medication'] for m in report['medicationData']] == ['Ibuprofen', 'Cetirizine']
    assert report['departmentData'] == [{'department': 'BSN', 'count': 1}]
    assert report['totalRequests'] == 3


def test_departments_combine_requests_and_registrations():
    created = '2024-06-01T08:00:00+08:00'
    report = build_report(
        [req(created, dept='BSN'), req(created, dept='BSIT')],
        [reg(created, dept='BSIT'), reg(created, dept='BSIT')],
        2024,
    )
    assert report['departmentData'] == [
        {'department': 'BSIT', 'count': 3},
        {'department': 'BSN', 'count': 1},
    ]


def test_total_students_is_union_of_distinct_ids():
    created = '2024-06-01T08:00:00+08:00'
    report = build_report(
        [req(created, school_id='A'), req(created, school_id='A'), req(created, school_id='B'), req(created, school_id='')],
        [reg(created, school_id='B'), reg(created, school_id='C')],
        2024,
    )
    assert report['requestStudents'] == 2
    assert report['registrationStudents'] == 2
    assert report['totalStudents'] == 3


def test_undated_documents_count_in_totals_only():
    report = build_report(
        [req(None, 'Loperamide', school_id='U1'), req('not a date', 'Loperamide'), req('2024-02-02T08:00:00+08:00')],
        [reg('', school_id='U2')],
        2024,
    )
    assert report['totalRequests'] == 3
    assert report['totalRegistrations'] == 1
    assert report['monthlyData'] == [{'month': '2024-02', 'requests': 1, 'registrations': 0, 'total': 1}]
    assert report['medicationData'][0] == {'medication': 'Loperamide', 'requests': 2}
    assert report['totalStudents'] == 3


def test_months_are_bucketed_in_local_time():
    # 16:30 UTC on 31 January is already 1 February in Manila
    report = build_report([req('2024-01-31T16:30:00Z')], [], 2024, 2)
    assert report['totalRequests'] == 1
    assert report['monthlyData'][0]['month'] == '2024-02'


def test_empty_input():
    report = build_report([], [], 2024)
    assert report['monthlyData'] == []
    assert report['medicationData'] == []
    assert report['totalStudents'] == 0


def test_period_helpers():
    assert coerce_datetime(None) is None
    assert coerce_datetime('2024-13-45') is None
    assert coerce_datetime(42) is None
    assert coerce_datetime(datetime.date(2024, 3, 1)) == datetime.datetime(2024, 3, 1)
    dt = coerce_datetime('2024-03-01')
    assert month_key(dt) == '2024-03'
    assert in_period(dt, 2024)
    assert in_period(dt, 2024, 3)
    assert not in_period(dt, 2024, 4)
    assert not in_period(dt, 2023)


def _stamp(model, when, **fields):
    return model.objects.create(created_at=when, updated_at=when, **fields)


@pytest.mark.django_db
def test_report_endpoint(staff_client):
    tz = timezone.get_default_timezone()
    common = {'year_section': '1-A', 'department_course': 'BSIT', 'referred_to': 'None', 'fullname': 'X'}
    _stamp(RequestForm, datetime.datetime(2024, 1, 15, 9, tzinfo=tz), assessment='Paracetamol', school_id_number='S1', **common)
    _stamp(RequestForm, datetime.datetime(2024, 2, 1, 9, tzinfo=tz), assessment='Ibuprofen', school_id_number='S2', **common)
    _stamp(Registration, datetime.datetime(2024, 1, 20, 9, tzinfo=tz), fullname='Y', school_id_number='S3',
           department_course='BSN', year_section='2-B')

    r = staff_client.get(reverse('report-medication'), {'year': 2024, 'month': 1})
    assert r.status_code == 200
    data = r.data['data']
    assert data['totalRequests'] == 1
    assert data['totalRegistrations'] == 1
    assert data['medicationData'] == [{'medication': 'Paracetamol', 'requests': 1}]
    assert data['monthlyData'] == [{'month': '2024-01', 'requests': 1, 'registrations': 1, 'total': 2}]
    assert data['totalStudents'] == 2

    r = staff_client.get(reverse('report-medication'), {'year': 2024, 'month': ''})
    assert r.status_code == 200
    assert r.data['data']['totalRequests'] == 2


@pytest.mark.django_db
def test_report_defaults_to_current_year(staff_client):
    RequestForm.objects.create(fullname='Z', year_section='1-A', school_id_number='S9', department_course='BSIT',
                               assessment='Cetirizine', referred_to='None')
    r = staff_client.get(reverse('report-medication'))
    assert r.status_code == 200
    assert r.data['data']['totalRequests'] == 1
    assert r.data['data']['monthlyData'][0]['month'] == month_key(timezone.localtime())


@pytest.mark.django_db
@pytest.mark.parametrize('params', [{'year': 2024, 'month': 13}, {'year': 2024, 'month': 'x'}, {'year': 'abcd'}])
def test_report_rejects_bad_period(staff_client, params):
    r = staff_client.get(reverse('report-medication'), params)
    assert r.status_code == 400
    assert r.data['code'] == 'invalid_value'


@pytest.mark.django_db
def test_report_requires_clinic_account(api_client):
    r = api_client.get(reverse('report-medication'), {'year': 2024})
    assert r.status_code == 401
