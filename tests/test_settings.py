import pytest
from django.contrib.auth.hashers import check_password

from dashboard.models import AuditLog
from siteconfig.models import SiteSettings
from siteconfig.services import SettingsService, site_settings

pytestmark = pytest.mark.django_db


def test_defaults_are_created_hashed(site):
    assert SiteSettings.objects.count() == 1
    assert site.review_passcode != "1234"
    assert check_password("1234", site.review_passcode)
    assert check_password("5678", site.bulk_purchase_passcode)
    assert check_password("2024", site.member_discount_code)
    assert site.product_regular_price == 19500
    assert site.product_member_price == 17500
    assert site.shipping_fee_per_unit == 320


def test_settings_row_is_a_singleton(site):
    other = SiteSettings(**SiteSettings.default_values())
    with pytest.raises(ValueError):
        other.save()

    assert SiteSettings.objects.count() == 1
    with pytest.raises(ValueError):
        site.delete()


def test_existing_settings_row_can_be_saved(site):
    site.seminar_capacity = 25
    site.save()

    stored = SiteSettings.objects.get()
    assert stored.seminar_capacity == 25
    assert stored.created is not None


def test_service_caches_until_refresh(db):
    service = SettingsService()
    first = service.get()
    SiteSettings.objects.filter(pk=first.pk).update(seminar_capacity=30)

    assert service.get() is first
    assert service.get(refresh=True).seminar_capacity == 30


def test_settings_api_requires_admin(api_client, user_client, site):
    assert api_client.get("/api/settings").status_code == 401
    assert user_client.get("/api/settings").status_code == 403


def test_settings_api_never_returns_passcodes(admin_client, site):
    response = admin_client.get("/api/settings")

    assert response.status_code == 200
    assert "review_passcode" not in response.data["settings"]
    assert "bulk_purchase_passcode" not in response.data["settings"]
    assert response.data["settings"]["seminar_capacity"] == 20


def test_passcode_update_is_hashed_and_takes_effect(admin_client, api_client, site):
    response = admin_client.patch("/api/settings", {"review_passcode": "9999", "seminar_capacity": 25}, format="json")

    assert response.status_code == 200
    stored = site_settings.get(refresh=True)
    assert stored.seminar_capacity == 25
    assert check_password("9999", stored.review_passcode)

    assert api_client.post("/api/reviews/verify-passcode", {"passcode": "1234"}, format="json").status_code == 401
    assert api_client.post("/api/reviews/verify-passcode", {"passcode": "9999"}, format="json").status_code == 200

    log = AuditLog.objects.get(action="settings.update")
    assert log.new_values["passcodes_changed"] == ["review_passcode"]
    assert "9999" not in str(log.new_values)


def test_passcode_update_requires_four_digits(admin_client, site):
    response = admin_client.patch("/api/settings", {"bulk_purchase_passcode": "12ab"}, format="json")

    assert response.status_code == 400
    assert "bulk_purchase_passcode" in response.data["errors"]


def test_public_settings(api_client, site):
    response = api_client.get("/api/settings/public")

    assert response.status_code == 200
    assert response.data["settings"]["product_regular_price"] == 19500
    assert "sms_enabled" not in response.data["settings"]


def test_public_settings_follow_updates_from_other_workers(api_client, site):
    site_settings.get()
    # 다른 프로세스에서 관리자가 변경한 경우 (이 프로세스의 보관 값은 그대로)
    SiteSettings.objects.filter(pk=site.pk).update(product_regular_price=21000)

    response = api_client.get("/api/settings/public")

    assert response.data["settings"]["product_regular_price"] == 21000
