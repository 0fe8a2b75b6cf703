"""
Project-level views: root info, health check and JSON error handlers.
"""
import logging

from django.conf import settings
from django.db import DatabaseError, connections
from django.http import JsonResponse
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def database_status(alias='default'):
    """'Connected' if the database answers a trivial query."""
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError as exc:
        logger.warning(f"Database health check failed: {exc}")
        return 'Disconnected'
    return 'Connected'


@api_view(['GET'])
@permission_classes([AllowAny])
def root(request):
    return Response({
        'message': 'Contact Form API',
        'version': settings.API_VERSION,
        'documentation': '/api/health',
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    """Liveness plus database connectivity. Always 200."""
    return Response({
        'success': True,
        'message': 'Server is running',
        'timestamp': timezone.now().isoformat(),
        'environment': settings.ENVIRONMENT,
        'database': database_status(),
    })


def not_found(request, exception=None):
    return JsonResponse(
        {'success': False, 'message': f'Route {request.path} not found'},
        status=404
    )


def server_error(request):
    return JsonResponse(
        {'success': False, 'message': 'Something went wrong!'},
        status=500
    )
