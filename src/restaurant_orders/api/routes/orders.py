from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse

from restaurant_orders.api.deps import get_order_store, require_staff
from restaurant_orders.crud.order import complete_order, get_orders
from restaurant_orders.schemas.order import OrdersRead
from restaurant_orders.schemas.user import CurrentUser
from restaurant_orders.storage.order_store import OrderStore


router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrdersRead)
def list_orders(
    user: CurrentUser = Depends(require_staff),
    store: OrderStore = Depends(get_order_store),
):
    """
    Возвращает очередь и выполненные заказы ресторана текущего сотрудника.
    """
    return get_orders(store, user.restaurant_link)


@router.post("/complete")
def complete_order_endpoint(
    index: int = Form(...),
    user: CurrentUser = Depends(require_staff),
    store: OrderStore = Depends(get_order_store),
):
    """
    Отмечает заказ выполненным и переносит его в completed-<ресторан>.json.
    """
    complete_order(store, user.restaurant_link, index)
    return RedirectResponse("/orders", status_code=302)
