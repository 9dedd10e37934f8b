"""
Test configuration for the gift card server.
"""
import pytest
from decimal import Decimal
from rest_framework.test import APIClient


@pytest.fixture
def test_user():
    from tests.factories import UserFactory
    return UserFactory()


@pytest.fixture
def other_user():
    from tests.factories import UserFactory
    return UserFactory()


@pytest.fixture
def staff_user():
    from tests.factories import UserFactory
    return UserFactory(is_staff=True, is_superuser=True)


@pytest.fixture
def gift_card_variant():
    """A purchasable 50.00 gift card amount."""
    from tests.factories import GiftCardVariantFactory
    return GiftCardVariantFactory(price=Decimal('50.00'))


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(test_user):
    """API client authenticated as test_user."""
    client = APIClient()
    client.force_authenticate(user=test_user)
    return client


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client
