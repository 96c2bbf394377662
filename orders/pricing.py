from dataclasses import dataclass

from .models import Order

BULK_MIN_QUANTITY = 20


@dataclass(frozen=True)
class Quote:
    unit_price: int
    shipping_fee: int
    total_amount: int


def quote(order_type: str, quantity: int, site) -> Quote:
    """
    주문 금액은 항상 서버에서 사이트 설정 가격으로 계산한다.
    회원가/대량 구매는 회원가 단가, 배송비는 수량당 부과.
    """
    if order_type in (Order.OrderType.MEMBER, Order.OrderType.BULK):
        unit_price = site.product_member_price
    else:
        unit_price = site.product_regular_price

    shipping_fee = site.shipping_fee_per_unit * quantity
    return Quote(
        unit_price=unit_price,
        shipping_fee=shipping_fee,
        total_amount=unit_price * quantity + shipping_fee,
    )
