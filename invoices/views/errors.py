import logging

from django.shortcuts import render

logger = logging.getLogger(__name__)


def not_found_view(request, exception=None):
    return render(request, 'errors/404.html', status=404)


def server_error_view(request):
    logger.error(f"Server error on {request.path}")
    return render(request, 'errors/500.html', status=500)
