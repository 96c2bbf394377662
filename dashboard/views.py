from django.db.models import Count
from rest_framework.views import APIView

from accounts.guards import IsAdminRole
from common.responses import success_response
from notifications.models import SmsLog
from orders.models import Order
from reviews.models import Review
from seminars.models import Application
from siteconfig.services import site_settings
from .models import AuditLog
from .serializers import AuditLogSerializer, SmsLogSerializer

DEFAULT_LIMIT = 100
MAX_LIMIT = 500


def count_by(queryset, field, choices) -> dict:
    """선택지별 개수 (없는 상태는 0)"""
    counts = dict.fromkeys(choices.values, 0)
    for row in queryset.values(field).annotate(count=Count("pk")):
        counts[row[field]] = row["count"]
    return counts


def parse_limit(request) -> int:
    try:
        limit = int(request.query_params.get("limit", DEFAULT_LIMIT))
    except (TypeError, ValueError):
        limit = DEFAULT_LIMIT
    return max(1, min(limit, MAX_LIMIT))


class SummaryView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        capacity = site_settings.get(refresh=True).seminar_capacity
        applications = count_by(Application.objects.all(), "status", Application.Status)
        active = Application.objects.active().count()

        return success_response(
            "ok",
            applications={
                "by_status": applications,
                "total": sum(applications.values()),
                "capacity": capacity,
                "remaining_seats": max(capacity - active, 0),
            },
            reviews=count_by(Review.objects.all(), "status", Review.Status),
            orders={
                "payment": count_by(Order.objects.all(), "payment_status", Order.PaymentStatus),
                "shipping": count_by(Order.objects.all(), "shipping_status", Order.ShippingStatus),
            },
            sms={
                "failed": SmsLog.objects.filter(status=SmsLog.Status.FAILED).count(),
            },
        )


class AuditLogListView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        logs = AuditLog.objects.select_related("user")
        entity_type = request.query_params.get("entity_type")
        if entity_type:
            logs = logs.filter(entity_type=entity_type)
        logs = logs[:parse_limit(request)]
        return success_response("ok", logs=AuditLogSerializer(logs, many=True).data)


class SmsLogListView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        logs = SmsLog.objects.all()
        status_filter = request.query_params.get("status")
        if status_filter:
            logs = logs.filter(status=status_filter)
        logs = logs[:parse_limit(request)]
        return success_response("ok", logs=SmsLogSerializer(logs, many=True).data)
