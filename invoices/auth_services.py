"""
Authentication and authorization services.

Credential checks (email + password against the salted hash), the sign-in flow
with classified failures, and the per-request authorization predicate for the
dashboard area.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from django.conf import settings
from django.contrib.auth import authenticate as django_authenticate, get_user_model, login, logout
from django.db import DatabaseError

from .forms import CredentialsForm

logger = logging.getLogger(__name__)
User = get_user_model()

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_AUTH_MESSAGE = "Something went wrong."


class UserLookupError(Exception):
    """The user store could not be queried. Never means "no such user"."""


class AuthErrorKind(str, Enum):
    CREDENTIALS_SIGNIN = "CredentialsSignin"
    CONFIGURATION = "Configuration"


@dataclass(frozen=True)
class AuthError:
    kind: AuthErrorKind
    detail: str = ""


@dataclass(frozen=True)
class SignInResult:
    user: Optional[Any] = None
    error: Optional[AuthError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AuthService:
    @staticmethod
    def get_user(email: str) -> Optional[Any]:
        try:
            return User.objects.get(email=email)
        except User.DoesNotExist:
            return None
        except User.MultipleObjectsReturned:
            # auth_user.email is not unique; an ambiguous email signs nobody in.
            logger.warning("Several users share the sign-in email; refusing")
            return None
        except DatabaseError as e:
            logger.error(f"Failed to fetch user: {e}")
            raise UserLookupError("Failed to fetch user.") from e

    @classmethod
    def authorize_credentials(cls, credentials: Mapping[str, Any]) -> Optional[Any]:
        """Map presented credentials to a user, or ``None`` if refused.

        Malformed input is refused before any lookup. Lookup faults raise
        ``UserLookupError``.
        """
        form = CredentialsForm(data={
            'email': credentials.get('email'),
            'password': credentials.get('password'),
        })
        if not form.is_valid():
            logger.info("Invalid credentials")
            return None

        email = form.cleaned_data['email']
        password = form.cleaned_data['password']

        user = cls.get_user(email)
        if user is None or not user.is_active:
            # Same hashing cost as a real password check.
            User().set_password(password)
            logger.info("Invalid credentials")
            return None

        if not user.check_password(password):
            logger.info("Invalid credentials")
            return None

        return user

    @staticmethod
    def sign_in(request, credentials: Mapping[str, Any]) -> SignInResult:
        """Authenticate ``credentials`` and start a session.

        Failures are classified into an ``AuthError``; anything else (a lookup
        fault, say) propagates unchanged.
        """
        if not hasattr(request, 'session'):
            return SignInResult(error=AuthError(AuthErrorKind.CONFIGURATION, "No session on request"))

        user = django_authenticate(
            request,
            email=credentials.get('email'),
            password=credentials.get('password'),
        )
        if user is None:
            return SignInResult(error=AuthError(AuthErrorKind.CREDENTIALS_SIGNIN))

        login(request, user)
        logger.info(f"User {user.pk} signed in")
        return SignInResult(user=user)

    @classmethod
    def authenticate(cls, request, prev_state: Optional[str], form_data: Mapping[str, Any]) -> Optional[str]:
        """Login form action: ``None`` on success, otherwise the message to show."""
        credentials = {
            'email': form_data.get('email'),
            'password': form_data.get('password'),
        }
        result = cls.sign_in(request, credentials)
        if result.ok:
            return None
        if result.error.kind == AuthErrorKind.CREDENTIALS_SIGNIN:
            return INVALID_CREDENTIALS_MESSAGE
        logger.warning(f"Sign-in failed: {result.error.kind.value} {result.error.detail}")
        return GENERIC_AUTH_MESSAGE

    @staticmethod
    def logout_user(request) -> None:
        user_id = getattr(request.user, 'pk', None)
        logout(request)
        logger.info(f"User {user_id} signed out")


# =============================================================================
# AUTHORIZATION
# =============================================================================

@dataclass(frozen=True)
class AuthConfig:
    sign_in_path: str = "/login"
    protected_prefix: str = "/dashboard"
    landing_path: str = "/dashboard"
    exempt_prefixes: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_settings(cls) -> "AuthConfig":
        gate = getattr(settings, 'AUTH_GATE', {})
        defaults = cls()
        return cls(
            sign_in_path=gate.get('SIGN_IN_PATH', defaults.sign_in_path),
            protected_prefix=gate.get('PROTECTED_PREFIX', defaults.protected_prefix),
            landing_path=gate.get('LANDING_PATH', defaults.landing_path),
            exempt_prefixes=tuple(gate.get('EXEMPT_PREFIXES', ())),
        )


@dataclass(frozen=True)
class AuthContext:
    user: Optional[Any] = None
    config: AuthConfig = field(default_factory=AuthConfig)

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None and self.user.is_authenticated

    @classmethod
    def from_request(cls, request, config: Optional[AuthConfig] = None) -> "AuthContext":
        return cls(user=getattr(request, 'user', None), config=config or AuthConfig.from_settings())


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class AuthorizationDecision:
    decision: Decision
    target: Optional[str] = None

    @classmethod
    def allow(cls) -> "AuthorizationDecision":
        return cls(Decision.ALLOW)

    @classmethod
    def deny(cls) -> "AuthorizationDecision":
        return cls(Decision.DENY)

    @classmethod
    def redirect(cls, target: str) -> "AuthorizationDecision":
        return cls(Decision.REDIRECT, target)


def authorize(auth: AuthContext, requested_path: str) -> AuthorizationDecision:
    """Decide access to ``requested_path``. Pure; evaluated on every request."""
    if requested_path.startswith(auth.config.protected_prefix):
        if auth.is_logged_in:
            return AuthorizationDecision.allow()
        return AuthorizationDecision.deny()
    if auth.is_logged_in:
        return AuthorizationDecision.redirect(auth.config.landing_path)
    return AuthorizationDecision.allow()
