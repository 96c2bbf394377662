import hashlib
import hmac
import logging
import re
import uuid

import requests
from django.conf import settings
from django.utils import timezone

from siteconfig.services import site_settings
from .models import SmsLog

logger = logging.getLogger(__name__)

COOLSMS_SEND_URL = "https://api.coolsms.co.kr/sms/2/send"


def number_with_commas(value) -> str:
    return f"{int(value):,}"


def mask_phone(phone: str) -> str:
    return f"***{phone[-4:]}" if phone else ""


class SmsService:
    """
    CoolSMS 문자 발송. 실패하면 한 번 더 시도하고, 모든 시도 결과를 SmsLog에 남긴다.
    발송 실패는 예외로 올리지 않고 False를 돌려준다.
    """

    provider_name = "coolsms"

    def __init__(self, api_key=None, api_secret=None, sender_number=None, admin_phone=None,
                 provider=None, timeout=5, settings_service=site_settings):
        self.api_key = api_key if api_key is not None else settings.SMS_API_KEY
        self.api_secret = api_secret if api_secret is not None else settings.SMS_API_SECRET
        self.sender_number = sender_number if sender_number is not None else settings.SMS_SENDER_NUMBER
        self.admin_phone = admin_phone if admin_phone is not None else settings.ADMIN_PHONE
        self.provider = provider if provider is not None else settings.SMS_PROVIDER
        self.timeout = timeout
        self.settings_service = settings_service

    @property
    def enabled(self) -> bool:
        if self.provider != self.provider_name or not self.api_key:
            return False
        return self.settings_service.get(refresh=True).sms_enabled

    def send(self, to: str, text: str, event_type: str = "manual", related_id="") -> bool:
        related_id = str(related_id or "")

        if not self.enabled:
            logger.warning("SMS service is disabled (event=%s)", event_type)
            self._log(to, text, False, "SMS service disabled", event_type, related_id)
            return False

        for failure_message in ("API call failed", "Retry failed"):
            delivered, error = self._send_via_coolsms(to, text)
            self._log(to, text, delivered, "" if delivered else (error or failure_message), event_type, related_id)
            if delivered:
                return True

        logger.error("SMS delivery failed (event=%s, to=%s)", event_type, mask_phone(to))
        return False

    def send_to_admin(self, text: str, event_type: str = "admin_notification", related_id="") -> bool:
        if not self.admin_phone:
            logger.warning("Admin phone number not configured")
            return False
        return self.send(self.admin_phone, text, event_type, related_id)

    def _send_via_coolsms(self, to: str, text: str):
        message = {
            "to": re.sub(r"[^0-9]", "", to),
            "from": self.sender_number,
            "text": text,
        }
        try:
            response = requests.post(
                COOLSMS_SEND_URL,
                headers={
                    "Authorization": self._auth_header(),
                    "Content-Type": "application/json",
                },
                json={"message": message},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("CoolSMS request error: %s", e)
            return False, str(e)[:255]

        if not response.ok:
            logger.warning("CoolSMS API error: %s", response.status_code)
            return False, f"HTTP {response.status_code}"

        try:
            result = response.json()
        except ValueError:
            return False, "Invalid response"

        delivered = result.get("success_count", 0) > 0 and result.get("error_count", 0) == 0
        return delivered, None

    def _auth_header(self) -> str:
        date = timezone.now().isoformat()
        salt = uuid.uuid4().hex
        signature = hmac.new(
            self.api_secret.encode("utf-8"),
            (date + salt).encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
        return f"HMAC-SHA256 apikey={self.api_key}, date={date}, salt={salt}, signature={signature}"

    def _log(self, to, text, delivered, error_message, event_type, related_id) -> None:
        SmsLog.objects.create(
            phone_number=to,
            message=text,
            status=SmsLog.Status.SUCCESS if delivered else SmsLog.Status.FAILED,
            provider=self.provider_name,
            error_message=error_message or "",
            event_type=event_type,
            related_id=related_id,
        )
