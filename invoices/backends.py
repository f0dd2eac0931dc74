from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

from .auth_services import AuthService

User = get_user_model()


class CredentialsBackend(BaseBackend):
    """Email + password sign-in backed by ``AuthService.authorize_credentials``."""

    def authenticate(self, request, email=None, password=None):
        if email is None or password is None:
            return None
        return AuthService.authorize_credentials({'email': email, 'password': password})

    def get_user(self, user_id):
        try:
            user = User._default_manager.get(pk=user_id)
        except User.DoesNotExist:
            return None
        return user if user.is_active else None
