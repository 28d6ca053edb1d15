from django.conf import settings
from django.db import connection
from django.db.utils import OperationalError
from django.http import JsonResponse
from django.utils import timezone
from django.views.static import serve


def health_check(request):
    """Liveness probe reporting database connectivity."""
    try:
        connection.ensure_connection()
        db_state = 'Connected'
    except OperationalError:
        db_state = 'Disconnected'

    return JsonResponse({
        'status': 'OK',
        'timestamp': timezone.now().isoformat(),
        'db': db_state,
    })


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


def uploaded_image(request, path):
    """Serve a photo saved by the local image storage."""
    return serve(request, path, document_root=settings.MEDIA_ROOT)
