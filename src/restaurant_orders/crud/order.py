from restaurant_orders.crud.basket import empty_basket
from restaurant_orders.errors import IndexOutOfRange
from restaurant_orders.logger import get_logger
from restaurant_orders.schemas.basket import Basket
from restaurant_orders.schemas.order import Order, OrdersRead
from restaurant_orders.storage.order_store import OrderStore

logger = get_logger(__name__)


def build_order(basket: Basket) -> Order:
    """
    Снимок корзины: название позиции -> количество, покупатель и сумма.
    """
    items_info = {}
    for item, quantity in basket.items.items():
        items_info[item.name] = quantity

    return Order(
        items_info=items_info,
        buyer=basket.user_name,
        total_amount=basket.total_amount,
    )


def submit_order(store: OrderStore, basket: Basket) -> Order:
    """
    Дописывает заказ в конец очереди ресторана и очищает корзину.
    Очередь читается и перезаписывается целиком.
    """
    order = build_order(basket)

    orders = store.load_pending(basket.restaurant_link)
    orders.append(order)
    store.save_pending(basket.restaurant_link, orders)

    logger.info(
        "order_submitted",
        restaurant_link=basket.restaurant_link,
        buyer=order.buyer,
        total_amount=order.total_amount,
        position=len(orders) - 1,
    )

    empty_basket(basket)
    return order


def complete_order(store: OrderStore, restaurant_link: str, index: int) -> Order:
    """
    Переносит заказ с позиции index из очереди в выполненные.
    Если процесс упадёт между двумя записями, заказ пропадёт из обоих списков.
    """
    orders = store.load_pending(restaurant_link)
    if index < 0 or index >= len(orders):
        raise IndexOutOfRange(index, len(orders))

    order = orders.pop(index)
    order.completed = True
    store.save_pending(restaurant_link, orders)

    completed = store.load_completed(restaurant_link)
    completed.append(order)
    store.save_completed(restaurant_link, completed)

    logger.info(
        "order_completed",
        restaurant_link=restaurant_link,
        index=index,
        buyer=order.buyer,
        pending_left=len(orders),
    )
    return order


def get_orders(store: OrderStore, restaurant_link: str) -> OrdersRead:
    return OrdersRead(
        restaurant_link=restaurant_link,
        pending=store.load_pending(restaurant_link),
        completed=store.load_completed(restaurant_link),
    )
