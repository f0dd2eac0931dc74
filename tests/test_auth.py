"""
Authentication tests: credential authorizer, sign-in classification and the
login form action.
"""
import pytest
from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser
from django.contrib.sessions.middleware import SessionMiddleware
from django.db import DatabaseError
from django.test import RequestFactory

from invoices.auth_services import (
    AuthErrorKind,
    AuthService,
    GENERIC_AUTH_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    UserLookupError,
)
from invoices.backends import CredentialsBackend
from tests.conftest import PASSWORD
from tests.factories import UserFactory


def session_request():
    request = RequestFactory().post('/login')
    SessionMiddleware(lambda r: None).process_request(request)
    request.user = AnonymousUser()
    return request


@pytest.mark.django_db
class TestAuthorizeCredentials:
    def test_valid_credentials_return_user(self, user):
        assert AuthService.authorize_credentials({'email': user.email, 'password': PASSWORD}) == user

    def test_wrong_password(self, user):
        assert AuthService.authorize_credentials({'email': user.email, 'password': 'wrong-password'}) is None

    def test_unknown_email(self, user):
        assert AuthService.authorize_credentials({'email': 'nobody@example.com', 'password': PASSWORD}) is None

    def test_email_match_is_exact(self, user):
        assert AuthService.authorize_credentials({'email': 'USER@nextmail.com', 'password': PASSWORD}) is None

    def test_inactive_user(self):
        inactive = UserFactory(email='inactive@example.com', password=PASSWORD, is_active=False)
        assert AuthService.authorize_credentials({'email': inactive.email, 'password': PASSWORD}) is None

    @pytest.mark.parametrize('credentials', [
        {'email': 'user@nextmail.com', 'password': '12345'},
        {'email': 'not-an-email', 'password': PASSWORD},
        {'email': 'user@nextmail.com'},
        {},
    ])
    def test_malformed_input_skips_lookup(self, user, credentials):
        with patch.object(AuthService, 'get_user') as get_user:
            assert AuthService.authorize_credentials(credentials) is None
        get_user.assert_not_called()

    def test_email_shared_by_two_accounts_is_refused(self, user):
        UserFactory(username='second-account', email=user.email, password=PASSWORD)
        assert AuthService.get_user(user.email) is None
        assert AuthService.authorize_credentials({'email': user.email, 'password': PASSWORD}) is None

    def test_lookup_fault_is_raised(self, user):
        with patch('invoices.auth_services.User.objects.get', side_effect=DatabaseError('timeout')):
            with pytest.raises(UserLookupError, match="Failed to fetch user."):
                AuthService.authorize_credentials({'email': user.email, 'password': PASSWORD})


@pytest.mark.django_db
class TestCredentialsBackend:
    def test_authenticate(self, user):
        backend = CredentialsBackend()
        assert backend.authenticate(None, email=user.email, password=PASSWORD) == user
        assert backend.authenticate(None, email=user.email, password='nope-nope') is None
        assert backend.authenticate(None) is None

    def test_get_user(self, user):
        backend = CredentialsBackend()
        assert backend.get_user(user.pk) == user
        assert backend.get_user(user.pk + 1000) is None


@pytest.mark.django_db
class TestSignIn:
    def test_success_starts_session(self, user):
        request = session_request()
        result = AuthService.sign_in(request, {'email': user.email, 'password': PASSWORD})
        assert result.ok
        assert result.user == user
        assert request.session['_auth_user_id'] == str(user.pk)

    def test_bad_credentials_are_classified(self, user):
        result = AuthService.sign_in(session_request(), {'email': user.email, 'password': 'bad-password'})
        assert not result.ok
        assert result.error.kind == AuthErrorKind.CREDENTIALS_SIGNIN

    def test_missing_session_is_configuration_error(self, user):
        request = RequestFactory().post('/login')
        result = AuthService.sign_in(request, {'email': user.email, 'password': PASSWORD})
        assert result.error.kind == AuthErrorKind.CONFIGURATION


@pytest.mark.django_db
class TestAuthenticateAction:
    def test_success_returns_none(self, user):
        assert AuthService.authenticate(session_request(), None, {'email': user.email, 'password': PASSWORD}) is None

    def test_invalid_credentials_message(self, user):
        message = AuthService.authenticate(session_request(), None, {'email': user.email, 'password': 'bad-password'})
        assert message == INVALID_CREDENTIALS_MESSAGE == "Invalid credentials."

    def test_other_auth_errors_are_generic(self, user):
        request = RequestFactory().post('/login')
        message = AuthService.authenticate(request, None, {'email': user.email, 'password': PASSWORD})
        assert message == GENERIC_AUTH_MESSAGE == "Something went wrong."

    def test_only_email_and_password_are_used(self, user):
        form_data = {'email': user.email, 'password': PASSWORD, 'is_staff': 'on', 'next': '/evil'}
        assert AuthService.authenticate(session_request(), None, form_data) is None

    def test_lookup_fault_propagates(self, user):
        with patch('invoices.auth_services.User.objects.get', side_effect=DatabaseError('timeout')):
            with pytest.raises(UserLookupError):
                AuthService.authenticate(session_request(), None, {'email': user.email, 'password': PASSWORD})
