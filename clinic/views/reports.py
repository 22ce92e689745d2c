from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.permissions import IsAdminRole
from clinic.responses import ok
from clinic.serializers.reports import ReportQuerySerializer
from clinic.services.reports import build_report, load_report_documents


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def medication_report(request):
    """Monthly request/registration report for ``?year=`` and optional ``?month=``.

    The year defaults to the current one in the clinic's time zone.
    """
    q = ReportQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    year = q.validated_data.get('year') or timezone.localdate().year
    month = q.validated_data.get('month')
    requests, registrations = load_report_documents()
    return ok(build_report(requests, registrations, year, month))
