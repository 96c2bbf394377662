from unittest import mock

import pytest

from dashboard.models import AuditLog
from orders import payments
from orders.models import Order
from tests.conftest import granted_capabilities

pytestmark = pytest.mark.django_db


def unlock_bulk(client):
    response = client.post("/api/orders/verify-bulk-passcode", {"passcode": "5678"}, format="json")
    assert response.status_code == 200


def create_order(client, payload):
    response = client.post("/api/orders", payload, format="json")
    assert response.status_code == 201, response.data
    return Order.objects.get(order_no=response.data["order"]["order_no"])


# ---- 주문 생성 / 권한 ----

def test_bulk_order_without_access_creates_nothing(api_client, site, order_payload):
    response = api_client.post("/api/orders", order_payload(order_type="bulk", quantity=20), format="json")

    assert response.status_code == 403
    assert response.data["code"] == "capability_required"
    assert Order.objects.count() == 0


def test_bulk_gate_runs_before_validation(api_client, site):
    response = api_client.post("/api/orders", {"order_type": "bulk"}, format="json")
    assert response.status_code == 403


@pytest.mark.parametrize("order_type", [["bulk"], {"type": "bulk"}, 1])
def test_non_string_order_type_is_rejected(api_client, site, order_payload, order_type):
    response = api_client.post("/api/orders", order_payload(order_type=order_type), format="json")

    assert response.status_code == 400
    assert "order_type" in response.data["errors"]
    assert Order.objects.count() == 0


def test_bulk_access_is_single_use(api_client, site, order_payload):
    unlock_bulk(api_client)

    first = api_client.post("/api/orders", order_payload(order_type="bulk", quantity=20), format="json")
    second = api_client.post("/api/orders", order_payload(order_type="bulk", quantity=20), format="json")

    assert first.status_code == 201
    assert second.status_code == 403
    assert Order.objects.count() == 1
    assert "bulk_access" not in granted_capabilities(api_client)


def test_bulk_pricing(api_client, site, order_payload):
    unlock_bulk(api_client)

    order = create_order(api_client, order_payload(order_type="bulk", quantity=20))

    assert order.unit_price == 17500
    assert order.shipping_fee == 6400
    assert order.total_amount == 356400
    assert order.payment_status == Order.PaymentStatus.WAITING
    assert order.order_no.startswith("TM")


def test_bulk_minimum_quantity_keeps_access(api_client, site, order_payload):
    unlock_bulk(api_client)

    response = api_client.post("/api/orders", order_payload(order_type="bulk", quantity=19), format="json")

    assert response.status_code == 400
    assert "quantity" in response.data["errors"]
    assert "bulk_access" in granted_capabilities(api_client)


def test_regular_order_is_priced_on_the_server(api_client, site, order_payload):
    payload = order_payload(quantity=2, total_amount=1, unit_price=1)

    order = create_order(api_client, payload)

    assert order.unit_price == 19500
    assert order.shipping_fee == 640
    assert order.total_amount == 39640
    assert order.customer_type == Order.CustomerType.GUEST


def test_member_order_requires_member_code(api_client, site, order_payload):
    assert api_client.post("/api/orders", order_payload(order_type="member"), format="json").status_code == 403

    api_client.post("/api/orders/verify-member-code", {"passcode": "2024"}, format="json")
    order = create_order(api_client, order_payload(order_type="member", quantity=1))

    assert order.unit_price == 17500
    assert order.total_amount == 17500 + 320


def test_order_for_unknown_product(api_client, site, order_payload):
    response = api_client.post("/api/orders", order_payload(product_id=9999), format="json")
    assert response.status_code == 400


def test_checkout_view_hides_contact_details(api_client, site, order_payload):
    order = create_order(api_client, order_payload())

    response = api_client.get(f"/api/orders/{order.order_no}")

    assert response.status_code == 200
    assert response.data["order"]["total_amount"] == order.total_amount
    assert "customer_phone" not in response.data["order"]
    assert api_client.get("/api/orders/TM000").status_code == 404


def test_order_list_requires_admin(api_client, admin_client, site, order_payload):
    create_order(api_client, order_payload())

    assert api_client.get("/api/orders").status_code == 401
    response = admin_client.get("/api/orders", {"payment_status": "waiting"})
    assert response.status_code == 200
    assert len(response.data["orders"]) == 1


# ---- 결제 승인 ----

def confirm(client, order, amount=None, payment_key="pay_test_key"):
    return client.post(
        "/api/payments/confirm",
        {
            "paymentKey": payment_key,
            "orderId": order.order_no,
            "amount": order.total_amount if amount is None else amount,
        },
        format="json",
    )


def test_amount_mismatch_keeps_order_waiting(api_client, site, order_payload):
    order = create_order(api_client, order_payload())

    with mock.patch.object(payments.toss_client, "confirm_payment") as confirm_payment:
        response = confirm(api_client, order, amount=order.total_amount - 1)

    assert response.status_code == 400
    assert response.data["code"] == "amount_mismatch"
    confirm_payment.assert_not_called()
    order.refresh_from_db()
    assert order.payment_status == Order.PaymentStatus.WAITING


def test_confirm_success(api_client, site, order_payload):
    order = create_order(api_client, order_payload())

    with mock.patch.object(payments.toss_client, "confirm_payment", return_value={"status": "DONE"}) as confirm_payment:
        response = confirm(api_client, order)

    assert response.status_code == 200
    confirm_payment.assert_called_once_with("pay_test_key", order.order_no, order.total_amount)
    order.refresh_from_db()
    assert order.payment_status == Order.PaymentStatus.SUCCESS
    assert order.toss_payment_key == "pay_test_key"
    assert order.paid_at is not None

    again = confirm(api_client, order)
    assert again.status_code == 409
    assert again.data["code"] == "payment_already_processed"


@pytest.mark.parametrize("toss_status, expected", [
    ("ABORTED", Order.PaymentStatus.FAILED),
    ("EXPIRED", Order.PaymentStatus.FAILED),
    ("IN_PROGRESS", Order.PaymentStatus.WAITING),
])
def test_confirm_maps_provider_status(api_client, site, order_payload, toss_status, expected):
    order = create_order(api_client, order_payload())

    with mock.patch.object(payments.toss_client, "confirm_payment", return_value={"status": toss_status}):
        confirm(api_client, order)

    order.refresh_from_db()
    assert order.payment_status == expected


def test_provider_error_keeps_order_waiting(api_client, site, order_payload):
    order = create_order(api_client, order_payload())

    error = payments.TossPaymentsError("카드 승인 거절", code="REJECT_CARD_PAYMENT", status_code=403)
    with mock.patch.object(payments.toss_client, "confirm_payment", side_effect=error):
        response = confirm(api_client, order)

    assert response.status_code == 502
    assert response.data["code"] == "payment_provider_error"
    order.refresh_from_db()
    assert order.payment_status == Order.PaymentStatus.WAITING


def test_confirm_unknown_order(api_client, site):
    response = api_client.post(
        "/api/payments/confirm",
        {"paymentKey": "k", "orderId": "TM404", "amount": 1000},
        format="json",
    )
    assert response.status_code == 404


# ---- 웹훅 ----

def test_webhook_rechecks_with_provider(api_client, site, order_payload):
    order = create_order(api_client, order_payload())
    payment = {"orderId": order.order_no, "status": "DONE", "totalAmount": order.total_amount}

    with mock.patch.object(payments.toss_client, "get_payment", return_value=payment) as get_payment:
        response = api_client.post(
            "/api/payments/webhook",
            {"eventType": "PAYMENT_STATUS_CHANGED", "data": {"paymentKey": "pk_1", "orderId": order.order_no, "status": "DONE"}},
            format="json",
        )

    assert response.status_code == 200
    assert response.data["processed"] is True
    get_payment.assert_called_once_with("pk_1")
    order.refresh_from_db()
    assert order.payment_status == Order.PaymentStatus.SUCCESS


def test_webhook_body_status_is_not_trusted(api_client, site, order_payload):
    order = create_order(api_client, order_payload())
    payment = {"orderId": order.order_no, "status": "IN_PROGRESS", "totalAmount": order.total_amount}

    with mock.patch.object(payments.toss_client, "get_payment", return_value=payment):
        response = api_client.post(
            "/api/payments/webhook",
            {"paymentKey": "pk_1", "orderId": order.order_no, "status": "DONE"},
            format="json",
        )

    assert response.data["processed"] is False
    order.refresh_from_db()
    assert order.payment_status == Order.PaymentStatus.WAITING


def test_webhook_marks_canceled_payment_failed(api_client, site, order_payload):
    order = create_order(api_client, order_payload())
    payment = {"orderId": order.order_no, "status": "CANCELED", "totalAmount": order.total_amount}

    with mock.patch.object(payments.toss_client, "get_payment", return_value=payment):
        api_client.post("/api/payments/webhook", {"paymentKey": "pk_1", "orderId": order.order_no}, format="json")

    order.refresh_from_db()
    assert order.payment_status == Order.PaymentStatus.FAILED


def test_webhook_does_not_touch_processed_order(api_client, site, order_payload):
    order = create_order(api_client, order_payload())
    Order.objects.filter(pk=order.pk).update(payment_status=Order.PaymentStatus.FAILED)
    payment = {"orderId": order.order_no, "status": "DONE", "totalAmount": order.total_amount}

    with mock.patch.object(payments.toss_client, "get_payment", return_value=payment):
        response = api_client.post("/api/payments/webhook", {"paymentKey": "pk_1", "orderId": order.order_no}, format="json")

    assert response.data["processed"] is False
    order.refresh_from_db()
    assert order.payment_status == Order.PaymentStatus.FAILED


# ---- 관리자 ----

def test_admin_payment_override(admin_client, api_client, site, order_payload):
    order = create_order(api_client, order_payload())
    url = f"/api/orders/{order.pk}/payment"

    assert admin_client.patch(url, {"payment_status": "success"}, format="json").status_code == 200
    assert admin_client.patch(url, {"payment_status": "failed"}, format="json").status_code == 200

    back_to_waiting = admin_client.patch(url, {"payment_status": "waiting"}, format="json")
    assert back_to_waiting.status_code == 409

    order.refresh_from_db()
    assert order.payment_status == Order.PaymentStatus.FAILED
    assert AuditLog.objects.filter(action="order.payment").count() == 2


def test_shipping_is_one_way(admin_client, api_client, site, order_payload):
    order = create_order(api_client, order_payload())
    url = f"/api/orders/{order.pk}/shipping"

    response = admin_client.patch(url, {"tracking_no": "1234567890"}, format="json")
    assert response.status_code == 200
    order.refresh_from_db()
    assert order.shipping_status == Order.ShippingStatus.SHIPPED
    assert order.tracking_no == "1234567890"

    assert admin_client.patch(url, {"tracking_no": "999"}, format="json").status_code == 409


def test_shipping_requires_admin(user_client, api_client, site, order_payload):
    order = create_order(api_client, order_payload())
    response = user_client.patch(f"/api/orders/{order.pk}/shipping", {"tracking_no": "1"}, format="json")
    assert response.status_code == 403


def test_product_image_upload_url(admin_client, product):
    s3_client = mock.Mock()
    s3_client.generate_presigned_url.return_value = "https://signed.example.com/put"

    with mock.patch("orders.views.boto3.client", return_value=s3_client):
        response = admin_client.post(
            f"/api/products/{product.pk}/image-upload-url", {"filename": "mat.PNG", "content_type": "image/png"}, format="json"
        )

    assert response.status_code == 200
    assert response.data["presigned_url"] == "https://signed.example.com/put"
    assert response.data["s3_url"].endswith(".png")
    params = s3_client.generate_presigned_url.call_args.kwargs["Params"]
    assert params["Key"].startswith(f"products/{product.pk}/")


def test_product_update_is_audited(admin_client, api_client, product):
    response = admin_client.patch(f"/api/products/{product.pk}", {"in_stock": False}, format="json")

    assert response.status_code == 200
    assert api_client.get("/api/products").data["products"][0]["in_stock"] is False
    assert AuditLog.objects.filter(action="product.update").exists()
