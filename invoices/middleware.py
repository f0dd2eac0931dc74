import logging

from django.contrib.auth import REDIRECT_FIELD_NAME
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

from .auth_services import AuthConfig, AuthContext, Decision, authorize

logger = logging.getLogger(__name__)


class AuthorizationMiddleware:
    """Applies the dashboard authorization predicate to every request.

    Must run after ``AuthenticationMiddleware`` so ``request.user`` is set.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.config = AuthConfig.from_settings()

    def __call__(self, request):
        if any(request.path.startswith(prefix) for prefix in self.config.exempt_prefixes):
            return self.get_response(request)

        auth = AuthContext.from_request(request, self.config)
        outcome = authorize(auth, request.path)

        if outcome.decision == Decision.DENY:
            logger.debug(f"Denied {request.path}; sending to sign-in")
            return redirect_to_login(
                request.get_full_path(),
                login_url=self.config.sign_in_path,
                redirect_field_name=REDIRECT_FIELD_NAME,
            )
        if outcome.decision == Decision.REDIRECT:
            return redirect(outcome.target)
        return self.get_response(request)
