from rest_framework import status as http_status
from rest_framework.response import Response


def ok(data=None, message=None, status=http_status.HTTP_200_OK):
    """Wrap ``data`` in the ``{success, message?, data?}`` envelope the SPA expects."""
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    return Response(body, status=status)
