from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from common.models import BaseModel


class Review(BaseModel):

    class Status(models.TextChoices):
        PENDING = "pending", "검토 대기"
        APPROVED = "approved", "게시"
        HIDDEN_BY_FILTER = "hidden_by_filter", "필터 숨김"

    id = models.AutoField(primary_key=True)
    review_body = models.TextField(max_length=2000) # 필터 적용 후 본문
    author_name = models.CharField(max_length=40, default="익명")
    rating = models.PositiveSmallIntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)

    # 관리자용 필터 판정 정보
    filter_flagged = models.BooleanField(default=False)
    filter_reason = models.CharField(max_length=100, blank=True, default="")

    class Meta:
        db_table = "reviews"
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["status"], name="reviews_status_idx"),
        ]

    def __str__(self):
        return f"{self.author_name} ({self.rating}) - {self.get_status_display()}"
