"""
Monthly report aggregation over request forms and registrations.

``build_report`` is a single pass over plain document dicts (keys as the
API exposes them: ``createdAt``, ``assessment``, ``departmentCourse``,
``schoolIdNumber``).  Grouping keys are used exactly as typed, so
``Paracetamol`` and ``paracetamol`` are separate buckets.

A document whose ``createdAt`` is missing or unparseable cannot be placed
in a month: it still counts towards the totals and tallies but never
appears in ``monthlyData``.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from clinic.models import RequestForm, Registration
from clinic.services.periods import coerce_datetime, in_period, month_key

Doc = Dict[str, Any]


def _filter_period(docs: Iterable[Doc], year: int, month: Optional[int]) -> List[tuple[Doc, Optional[str]]]:
    kept = []
    for doc in docs:
        dt = coerce_datetime(doc.get('createdAt'))
        if dt is None:
            kept.append((doc, None))
        elif in_period(dt, year, month):
            kept.append((doc, month_key(dt)))
    return kept


def _key(doc: Doc, field: str) -> Optional[str]:
    value = doc.get(field)
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def _tally(docs: Iterable[Doc], field: str) -> Counter:
    counter: Counter = Counter()
    for doc in docs:
        key = _key(doc, field)
        if key is not None:
            counter[key] += 1
    return counter


def _distinct_ids(docs: Iterable[Doc]) -> set[str]:
    return {k for k in (_key(d, 'schoolIdNumber') for d in docs) if k is not None}


def build_report(requests: Iterable[Doc], registrations: Iterable[Doc], year: int, month: Optional[int] = None) -> Dict[str, Any]:
    req = _filter_period(requests, year, month)
    reg = _filter_period(registrations, year, month)
    req_docs = [d for d, _ in req]
    reg_docs = [d for d, _ in reg]

    months: Dict[str, Dict[str, Any]] = {}
    for series, rows in (('requests', req), ('registrations', reg)):
        for _, key in rows:
            if key is None:
                continue
            bucket = months.setdefault(key, {'month': key, 'requests': 0, 'registrations': 0, 'total': 0})
            bucket[series] += 1
            bucket['total'] += 1
    monthly_data = [months[k] for k in sorted(months)]

    # most_common keeps first-seen order among equal counts
    assessments = _tally(req_docs, 'assessment').most_common()
    departments = (_tally(req_docs, 'departmentCourse') + _tally(reg_docs, 'departmentCourse')).most_common()

    request_ids = _distinct_ids(req_docs)
    registration_ids = _distinct_ids(reg_docs)

    return {
        'monthlyData': monthly_data,
        'medicationData': [{'medication': name, 'requests': n} for name, n in assessments],
        'assessmentData': [{'assessment': name, 'count': n} for name, n in assessments],
        'departmentData': [{'department': name, 'count': n} for name, n in departments],
        'totalRequests': len(req_docs),
        'totalRegistrations': len(reg_docs),
        'totalStudents': len(request_ids | registration_ids),
        'requestStudents': len(request_ids),
        'registrationStudents': len(registration_ids),
    }


def load_report_documents() -> tuple[List[Doc], List[Doc]]:
    """Read every request and registration as report documents, oldest first."""
    requests = [
        {
            'createdAt': r['created_at'],
            'assessment': r['assessment'],
            'departmentCourse': r['department_course'],
            'schoolIdNumber': r['school_id_number'],
        }
        for r in RequestForm.objects.order_by('created_at').values(
            'created_at', 'assessment', 'department_course', 'school_id_number')
    ]
    registrations = [
        {
            'createdAt': r['created_at'],
            'departmentCourse': r['department_course'],
            'schoolIdNumber': r['school_id_number'],
        }
        for r in Registration.objects.order_by('created_at').values(
            'created_at', 'department_course', 'school_id_number')
    ]
    return requests, registrations
