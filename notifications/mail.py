import logging

from django.conf import settings
from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

logger = logging.getLogger(__name__)


class EmailService:
    """SendGrid 메일 발송. 실패 시 한 번 재시도하고 결과만 bool로 돌려준다."""

    def __init__(self, api_key=None, from_email=None):
        self.api_key = api_key if api_key is not None else settings.SENDGRID_API_KEY
        self.from_email = from_email if from_email is not None else settings.NOTIFICATION_FROM_EMAIL

    def send(self, to: str, subject: str, text: str = "", html: str = "") -> bool:
        if not self.api_key:
            logger.warning("SendGrid API key is not set; email to %s skipped", to)
            return False

        client = SendGridAPIClient(self.api_key)

        for attempt in (1, 2):
            # 시도마다 새 메시지 (Mail 객체는 전송 후 재사용하지 않는다)
            message = Mail(
                from_email=self.from_email,
                to_emails=to,
                subject=subject,
                plain_text_content=text or subject,
                html_content=html or None,
            )
            try:
                response = client.send(message)
            except HTTPError as e:
                logger.warning("SendGrid API error (attempt %d): %s", attempt, e.status_code)
                continue
            except OSError as e:
                logger.warning("SendGrid request error (attempt %d): %s", attempt, e)
                continue

            if response.status_code in (200, 201, 202):
                logger.info("Email sent successfully to %s", to)
                return True
            logger.warning("SendGrid API error (attempt %d): %s", attempt, response.status_code)

        logger.error("Email delivery failed: %s", subject)
        return False
