import logging

import requests
from django.conf import settings

from .models import Order

logger = logging.getLogger(__name__)

# Toss 결제 상태 -> 주문 결제 상태 (그 외 상태는 대기 유지)
DONE_STATUSES = frozenset({"DONE"})
FAILED_STATUSES = frozenset({"CANCELED", "ABORTED", "EXPIRED"})


class TossPaymentsError(Exception):

    def __init__(self, message, code=None, status_code=None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class TossPaymentsClient:

    def __init__(self, secret_key=None, base_url=None, timeout=10):
        self.secret_key = secret_key if secret_key is not None else settings.TOSS_SECRET_KEY
        self.base_url = (base_url or settings.TOSS_API_BASE_URL).rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, payload=None) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(
                method,
                url,
                auth=(self.secret_key, ""),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TossPaymentsError(f"Toss request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            raise TossPaymentsError(
                data.get("message") or f"HTTP {response.status_code}",
                code=data.get("code"),
                status_code=response.status_code,
            )
        return data

    def confirm_payment(self, payment_key: str, order_id: str, amount: int) -> dict:
        return self._request("POST", "/payments/confirm", {
            "paymentKey": payment_key,
            "orderId": order_id,
            "amount": amount,
        })

    def get_payment(self, payment_key: str) -> dict:
        return self._request("GET", f"/payments/{payment_key}")


def map_payment_status(toss_status):
    """Toss 상태를 주문 결제 상태로 변환. 아직 확정되지 않은 상태면 None"""
    if toss_status in DONE_STATUSES:
        return Order.PaymentStatus.SUCCESS.value
    if toss_status in FAILED_STATUSES:
        return Order.PaymentStatus.FAILED.value
    return None


toss_client = TossPaymentsClient()
