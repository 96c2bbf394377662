from django.utils.html import escape

from .sms import number_with_commas

BANK_ACCOUNT = "IM뱅크(구 대구은행) 50811-8677704"

CLASS_TYPE_LABELS = (
    ("class_type_infant", "유아"),
    ("class_type_elementary", "초등"),
    ("class_type_middle_high", "중고등"),
    ("class_type_adult", "성인"),
    ("class_type_senior", "시니어"),
    ("class_type_rehab", "재활"),
)


# SMS 문구

def admin_seminar_application(application, total: int, remaining: int) -> str:
    size = application.uniform_size or "M"
    return (
        f"[TAPMOVE] 신규 세미나 신청: {application.name}/{application.phone[-4:]}, 사이즈 {size}. "
        f"현재 {total}명(잔여 {remaining})."
    )


def admin_seminar_payment(application) -> str:
    return f"[TAPMOVE] 결제확정: {application.name}/{application.phone[-4:]} - 세미나 결제 완료."


def customer_seminar_application(application, seminar) -> str:
    return (
        f"[TAPMOVE] {application.name}님 신청이 접수되었습니다. 교육일 {seminar.seminar_date}, "
        f"장소: {seminar.seminar_location}. 준비물: 실내운동화·수건. 문의 {seminar.seminar_contact}"
    )


def customer_seminar_payment() -> str:
    return "[TAPMOVE] 결제 확인 완료! 세미나에서 뵙겠습니다. 오시는 길/공지: 홈페이지 공지 확인 부탁드립니다."


def admin_product_order(order) -> str:
    return (
        f"[TAPMOVE] 신규 주문 {order.order_no}: {order.product_name}/{order.quantity}개, "
        f"합계 {number_with_commas(order.total_amount)}원(배송비 {number_with_commas(order.shipping_fee)}원)."
    )


def customer_product_order(order) -> str:
    return (
        f"[TAPMOVE] 주문 접수({order.order_no}) - {order.product_name}/{order.quantity}개, "
        f"결제확인 후 발송 예정입니다."
    )


def customer_product_payment(order) -> str:
    return (
        f"[TAPMOVE] {order.customer_name}님의 주문이 결제완료되었습니다.\n"
        f"주문번호: {order.order_no}\n"
        f"결제금액: {number_with_commas(order.total_amount)}원\n"
        f"배송지: {order.shipping_address}"
    )


def customer_product_shipping(order) -> str:
    return f"[TAPMOVE] 출고 완료 - 운송장 {order.tracking_no}로 조회 가능합니다. 감사합니다."


# 이메일

def application_notification_email(application) -> dict:
    """신청 접수 시 관리자에게 보내는 메일"""
    class_types = [label for field, label in CLASS_TYPE_LABELS if getattr(application, field)]
    class_plan = "진행 예정" if application.class_plan == "plan" else "하지 않음"

    rows = [
        ("성명", application.name),
        ("생년월일", application.birthdate),
        ("이메일", application.email),
        ("연락처", application.phone),
        ("주소", application.address),
        ("입금자명", application.depositor_name),
        ("유니폼 사이즈", application.uniform_size or "선택 안함"),
        ("수업 진행", class_plan),
    ]
    if class_types:
        rows.append(("수업 대상", ", ".join(class_types)))

    html_rows = "".join(
        f"<tr><th style=\"text-align:left;padding:6px 12px;\">{escape(label)}</th>"
        f"<td style=\"padding:6px 12px;\">{escape(value)}</td></tr>"
        for label, value in rows
    )
    html = (
        "<div style=\"font-family: 'Noto Sans KR', Arial, sans-serif; max-width: 600px; margin: 0 auto;\">"
        "<h1 style=\"font-size:22px;\">새로운 세미나 신청</h1>"
        "<p>TAPMOVE 공식 웹사이트에서 새로운 신청이 접수되었습니다.</p>"
        f"<table>{html_rows}</table>"
        f"<p>입금 계좌: {BANK_ACCOUNT} / 입금자명: {escape(application.depositor_name)}</p>"
        "<p style=\"color:#6b7280;font-size:12px;\">신청 승인은 관리자 페이지에서 처리해주세요.</p>"
        "</div>"
    )

    return {
        "subject": f"[TAPMOVE] 새로운 세미나 신청 - {application.name}님",
        "html": html,
        "text": (
            "새로운 세미나 신청이 접수되었습니다.\n\n"
            f"신청자: {application.name}\n"
            f"이메일: {application.email}\n"
            f"연락처: {application.phone}\n"
            f"입금자명: {application.depositor_name}"
        ),
    }


def application_approval_email(application, seminar) -> dict:
    """신청 승인(confirmed) 시 신청자에게 보내는 메일"""
    html = (
        "<div style=\"font-family: 'Noto Sans KR', Arial, sans-serif; max-width: 600px; margin: 0 auto;\">"
        "<h1 style=\"font-size:24px;\">신청이 승인되었습니다!</h1>"
        f"<p>안녕하세요 <strong>{escape(application.name)}</strong>님,<br/>"
        "TAPMOVE 세미나 신청이 정상적으로 승인되었습니다.</p>"
        "<h3>세미나 안내사항</h3>"
        "<ul>"
        f"<li>일시: {escape(seminar.seminar_date)}</li>"
        f"<li>장소: {escape(seminar.seminar_location)}</li>"
        "<li>세미나 당일 신분증을 지참해주세요</li>"
        "<li>준비물: 실내운동화, 수건</li>"
        "</ul>"
        f"<p>문의: {escape(seminar.seminar_contact)}</p>"
        "</div>"
    )

    return {
        "subject": "[TAPMOVE] 세미나 신청이 승인되었습니다",
        "html": html,
        "text": (
            f"{application.name}님, TAPMOVE 세미나 신청이 승인되었습니다.\n\n"
            f"일시: {seminar.seminar_date}\n"
            f"장소: {seminar.seminar_location}\n"
            f"문의: {seminar.seminar_contact}"
        ),
    }
