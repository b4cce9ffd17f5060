"""Global pytest configuration and fixtures"""

import pytest


@pytest.fixture
def user(db):
    """Create a test user"""
    from tests.factories import UserFactory

    return UserFactory(username="member")


@pytest.fixture
def admin_user(db):
    """Create an admin user"""
    from tests.factories import AdminUserFactory

    return AdminUserFactory(username="admin")


@pytest.fixture
def api_client():
    """Create an API client"""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def auth_client(user):
    """Create an authenticated API client"""
    from rest_framework.test import APIClient

    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_client(admin_user):
    """Create an admin API client"""
    from rest_framework.test import APIClient

    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def store(db):
    """Category store with the standard connector"""
    from apps.categories.connectors import StandardConnector
    from apps.categories.services import CategoryStore

    return CategoryStore(connector=StandardConnector())


@pytest.fixture
def manager(store):
    """Association manager sharing the store"""
    from apps.categories.services import AssociationManager

    return AssociationManager(store=store)
