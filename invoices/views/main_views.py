"""
Authentication views: landing page, sign-in and sign-out.
"""
import logging

from django.conf import settings
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST
from django_ratelimit.decorators import ratelimit

from ..auth_services import AuthService
from ..forms import CredentialsForm

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = "Too many sign-in attempts. Please wait a minute and try again."


def landing_view(request):
    return render(request, "pages/landing.html")


def _safe_next_url(request) -> str:
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return next_url
    return settings.LOGIN_REDIRECT_URL


@ratelimit(key='ip', rate=getattr(settings, 'LOGIN_RATE_LIMIT', '10/m'), method='POST', block=False)
def login_view(request):
    error_message = None

    if request.method == 'POST':
        if getattr(request, 'limited', False):
            logger.warning("Sign-in rate limit hit")
            error_message = RATE_LIMITED_MESSAGE
        else:
            error_message = AuthService.authenticate(request, None, request.POST.dict())
            if error_message is None:
                return redirect(_safe_next_url(request))
        form = CredentialsForm(request.POST)
        form.add_error_class()
    else:
        form = CredentialsForm()

    return render(request, 'pages/auth/login.html', {
        'form': form,
        'error_message': error_message,
        'next': request.POST.get('next') or request.GET.get('next', ''),
    })


@require_POST
def logout_view(request):
    AuthService.logout_user(request)
    return redirect(settings.LOGOUT_REDIRECT_URL)
