from django.db import models

from common.models import BaseModel


class SmsLog(BaseModel):

    class Status(models.TextChoices):
        SUCCESS = "success", "성공"
        FAILED = "failed", "실패"

    phone_number = models.CharField(max_length=20)
    message = models.TextField()
    status = models.CharField(max_length=10, choices=Status.choices)
    provider = models.CharField(max_length=20, default="coolsms")
    error_message = models.CharField(max_length=255, blank=True, default="")
    event_type = models.CharField(max_length=40, default="manual") # 예: seminar_application, order_created
    related_id = models.CharField(max_length=64, blank=True, default="")

    class Meta:
        db_table = "sms_logs"
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["status"], name="sms_logs_status_idx"),
        ]

    def __str__(self):
        return f"{self.event_type} -> {self.phone_number} ({self.status})"
