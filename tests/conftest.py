"""
공통 fixture.
캐시(throttle/잠금 카운터)와 사이트 설정 캐시는 테스트마다 초기화한다.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from accounts.models import User
from orders.models import Product
from siteconfig.services import site_settings


@pytest.fixture(autouse=True)
def isolate_state(settings):
    settings.NOTIFICATIONS_ASYNC = False
    cache.clear()
    site_settings.invalidate()
    yield
    cache.clear()
    site_settings.invalidate()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(
        email="admin@tapmove.com",
        password="admin123!",
        name="관리자",
    )


@pytest.fixture
def regular_user(db):
    return User.objects.create_user(
        email="member@example.com",
        password="member-pass-2024",
        name="회원",
    )


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_login(admin_user)
    return client


@pytest.fixture
def user_client(regular_user):
    client = APIClient()
    client.force_login(regular_user)
    return client


@pytest.fixture
def site(db):
    return site_settings.get(refresh=True)


@pytest.fixture
def product(db):
    return Product.objects.create(
        name="TAPMOVE 매트",
        description="TAPMOVE 공식 매트",
        price=19500,
    )


@pytest.fixture
def order_payload(product):
    def build(**overrides):
        payload = {
            "product_id": product.pk,
            "quantity": 1,
            "order_type": "regular",
            "customer_name": "홍길동",
            "customer_email": "buyer@example.com",
            "customer_phone": "010-1234-5678",
            "shipping_address": "대구시 북구 침산남로 172",
        }
        payload.update(overrides)
        return payload
    return build


def granted_capabilities(client):
    return set(client.session.get("granted_capabilities", []))
