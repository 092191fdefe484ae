import logging
import time

logger = logging.getLogger("orders.requests")


class RequestLoggingMiddleware:
    """Una línea de log por request HTTP: método, ruta, status y duración."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.perf_counter()
        response = self.get_response(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method, request.path, response.status_code, elapsed_ms,
        )
        return response
