import pytest
from django.core.cache import cache
from django.test import Client

from tests.factories import CustomerFactory, UserFactory

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def _isolated_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def _fast_password_hashing(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def client():
    return Client()


@pytest.fixture
def user(db):
    return UserFactory(email='user@nextmail.com', password=PASSWORD)


@pytest.fixture
def authenticated_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def customer(db):
    return CustomerFactory(name='Delba de Oliveira', email='delba@oliveira.com')
