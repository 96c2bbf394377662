import pytest

from dashboard.models import AuditLog
from notifications.models import SmsLog
from orders.models import Order
from reviews.models import Review
from seminars.models import Application
from tests.test_seminars import make_application

pytestmark = pytest.mark.django_db


def test_summary_counters(admin_client, site, product):
    make_application(status=Application.Status.CONFIRMED)
    make_application(status=Application.Status.REJECTED)
    make_application()
    Review.objects.create(review_body="좋은 제품입니다 추천해요", status=Review.Status.APPROVED)
    Order.objects.create(
        product=product, product_name=product.name, quantity=1, unit_price=19500,
        shipping_fee=320, total_amount=19820, customer_name="홍길동",
        customer_email="buyer@example.com", customer_phone="01012345678", shipping_address="대구",
    )
    SmsLog.objects.create(phone_number="01012345678", message="x", status=SmsLog.Status.FAILED)

    response = admin_client.get("/api/admin/summary")

    assert response.status_code == 200
    applications = response.data["applications"]
    assert applications["by_status"]["confirmed"] == 1
    assert applications["by_status"]["payment_confirmed"] == 0
    assert applications["total"] == 3
    assert applications["remaining_seats"] == 18
    assert response.data["reviews"]["approved"] == 1
    assert response.data["orders"]["payment"]["waiting"] == 1
    assert response.data["orders"]["shipping"]["preparing"] == 1
    assert response.data["sms"]["failed"] == 1


def test_audit_and_sms_logs(admin_client, user_client, site):
    application = make_application()
    admin_client.patch(f"/api/applications/{application.pk}/status", {"status": "rejected"}, format="json")
    SmsLog.objects.create(phone_number="01012345678", message="x", status=SmsLog.Status.SUCCESS)

    audit = admin_client.get("/api/admin/audit-logs", {"entity_type": "application"})
    assert audit.status_code == 200
    assert audit.data["logs"][0]["action"] == "application.status"
    assert audit.data["logs"][0]["user_email"] == "admin@tapmove.com"

    sms_logs = admin_client.get("/api/admin/sms-logs", {"status": "success"})
    assert len(sms_logs.data["logs"]) == 1

    assert user_client.get("/api/admin/audit-logs").status_code == 403


def test_audit_records_connecting_address(admin_client, site):
    application = make_application()

    admin_client.patch(
        f"/api/applications/{application.pk}/status", {"status": "rejected"}, format="json",
        HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1",
    )

    assert AuditLog.objects.get(action="application.status").ip_address == "127.0.0.1"
