import logging

from django.conf import settings

from orders.models import Order
from seminars.models import Application
from siteconfig.services import site_settings
from . import templates
from .mail import EmailService
from .sms import SmsService

logger = logging.getLogger(__name__)


def application_submitted(application_id):
    application = Application.objects.get(pk=application_id)
    seminar = site_settings.get(refresh=True)
    sms = SmsService()

    total = Application.objects.active().count()
    remaining = max(seminar.seminar_capacity - total, 0)

    sms.send_to_admin(
        templates.admin_seminar_application(application, total, remaining),
        "seminar_application", application.pk,
    )
    sms.send(
        application.phone,
        templates.customer_seminar_application(application, seminar),
        "seminar_application", application.pk,
    )

    if settings.ADMIN_EMAIL:
        EmailService().send(settings.ADMIN_EMAIL, **templates.application_notification_email(application))


def application_status_changed(application_id, previous_status):
    application = Application.objects.get(pk=application_id)
    sms = SmsService()

    if application.status == Application.Status.PAYMENT_CONFIRMED:
        sms.send_to_admin(templates.admin_seminar_payment(application), "seminar_payment", application.pk)
        sms.send(application.phone, templates.customer_seminar_payment(), "seminar_payment", application.pk)

    elif application.status == Application.Status.CONFIRMED:
        EmailService().send(
            application.email,
            **templates.application_approval_email(application, site_settings.get(refresh=True)),
        )

    logger.info("Application %s notifications sent (%s -> %s)", application.pk, previous_status, application.status)


def order_created(order_id):
    order = Order.objects.get(pk=order_id)
    sms = SmsService()
    sms.send_to_admin(templates.admin_product_order(order), "order_created", order.order_no)
    sms.send(order.customer_phone, templates.customer_product_order(order), "order_created", order.order_no)


def order_paid(order_id):
    order = Order.objects.get(pk=order_id)
    SmsService().send(order.customer_phone, templates.customer_product_payment(order), "order_paid", order.order_no)


def order_shipped(order_id):
    order = Order.objects.get(pk=order_id)
    SmsService().send(order.customer_phone, templates.customer_product_shipping(order), "order_shipped", order.order_no)
