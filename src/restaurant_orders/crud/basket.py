from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional

from restaurant_orders.logger import get_logger
from restaurant_orders.schemas.basket import Basket, Item

logger = get_logger(__name__)

ZERO_TOTAL = "0.00"

# цены длиннее 100 знаков до запятой считаются нечитаемыми
MAX_PRICE_DIGITS = 100
TOTAL_PRECISION = 256


def parse_price(price: str) -> Decimal:
    """
    Цена хранится строкой. Нечитаемая цена считается нулём и пишется в лог.
    Пробелы по краям и разделители "_" цену портят.
    """
    value = None
    if isinstance(price, str) and price == price.strip() and "_" not in price:
        try:
            value = Decimal(price)
        except InvalidOperation:
            value = None

    if value is None or not value.is_finite() or value.adjusted() >= MAX_PRICE_DIGITS:
        logger.warning("price_parse_failed", price=price)
        return Decimal("0")
    return value


def calculate_total(basket: Basket) -> Basket:
    with localcontext() as ctx:
        ctx.prec = TOTAL_PRECISION
        total = sum(
            (parse_price(item.price) * quantity for item, quantity in basket.items.items()),
            Decimal("0"),
        )
        basket.total_amount = f"{total.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):.2f}"
    return basket


def add_item(basket: Optional[Basket], restaurant_link: str, item: Item, user_name: str) -> Basket:
    """
    Добавляет позицию в корзину сессии.
    Корзина создаётся при первом добавлении; смена ресторана очищает её.
    """
    if basket is None:
        basket = Basket(restaurant_link=restaurant_link, total_amount=ZERO_TOTAL, user_name=user_name)

    if basket.restaurant_link != restaurant_link:
        logger.info(
            "basket_restaurant_switched",
            previous=basket.restaurant_link,
            current=restaurant_link,
        )
        basket.restaurant_link = restaurant_link
        basket.items = {}

    basket.items[item] = basket.items.get(item, 0) + 1

    return calculate_total(basket)


def remove_item(basket: Basket, item: Item) -> Basket:
    """
    Уменьшает количество позиции на 1, последнюю штуку удаляет.
    Отсутствующая позиция ничего не меняет.
    """
    if basket.items.get(item, 0) > 1:
        basket.items[item] -= 1
    else:
        basket.items.pop(item, None)

    return calculate_total(basket)


def empty_basket(basket: Basket) -> Basket:
    basket.items = {}
    basket.total_amount = ZERO_TOTAL
    return basket
