import uuid
import logging
import threading

logger = logging.getLogger(__name__)

_request_local = threading.local()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware:
    """Tags every request with an id, exposed to log records and echoed back."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.request_id = request_id
        _request_local.request_id = request_id
        try:
            response = self.get_response(request)
        finally:
            _request_local.request_id = None
        response[REQUEST_ID_HEADER] = request_id
        return response


def get_current_request_id():
    return getattr(_request_local, 'request_id', None) or 'no-id'
