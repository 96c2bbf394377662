from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from common.models import BaseModel


class AuditLog(BaseModel):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
    )
    action = models.CharField(max_length=64) # 예: application.status
    entity_type = models.CharField(max_length=40)
    entity_id = models.CharField(max_length=64)
    old_values = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder)
    new_values = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=255, blank=True, default='')

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["entity_type", "entity_id"], name="audit_logs_entity_idx"),
        ]

    def __str__(self):
        return f"{self.action} {self.entity_type}#{self.entity_id}"
