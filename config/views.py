import logging

from django.db import connection, DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """Liveness probe."""
    return JsonResponse({
        'status': 'healthy',
        'service': 'cardkeeper',
    })


def ready_check(request):
    """Readiness probe: fails while the database is unreachable."""
    try:
        connection.ensure_connection()
    except DatabaseError:
        logger.exception("Readiness check failed")
        return JsonResponse({
            'status': 'not ready',
            'reason': 'database connection error',
        }, status=503)

    return JsonResponse({'status': 'ready'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
