"""
Request logging middleware.
"""
import logging
import time

from django.utils import timezone

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Log method, path and timestamp of every request, then the response
    status and duration once the view has run.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        logger.info(f"{request.method} {request.path} - {timezone.now().isoformat()}")
        start_time = time.time()

        response = self.get_response(request)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(f"{request.method} {request.path} -> {response.status_code} ({duration_ms}ms)")
        return response
