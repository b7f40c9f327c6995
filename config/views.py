from django.http import JsonResponse

from apps.common.exception_handler import error_payload
from apps.common.exceptions import ErrorKind


def health_check(request):
    """Liveness probe."""
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse(
        error_payload(ErrorKind.NOT_FOUND, 'not_found', 'Not found.'),
        status=404
    )


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse(
        error_payload(ErrorKind.INTERNAL_ERROR, 'internal_error', 'Internal server error.'),
        status=500
    )
