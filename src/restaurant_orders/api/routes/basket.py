from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse

from restaurant_orders.api.deps import BasketSession, get_basket_session, get_order_store, require_user
from restaurant_orders.crud.basket import add_item, empty_basket, remove_item
from restaurant_orders.crud.order import submit_order
from restaurant_orders.logger import get_logger
from restaurant_orders.schemas.basket import BasketRead, Item, OrderPage
from restaurant_orders.schemas.user import CurrentUser
from restaurant_orders.storage.order_store import OrderStore, validate_restaurant_link

logger = get_logger(__name__)

router = APIRouter(tags=["basket"])


def order_view(restaurant_link: str) -> RedirectResponse:
    return RedirectResponse(f"/order/{restaurant_link}", status_code=302)


def item_form(
    item_name: str = Form(...),
    item_price: str = Form(...),
    item_link: str = Form(...),
) -> Item:
    return Item(name=item_name, price=item_price, link=item_link)


@router.post("/basket/add")
def basket_add(
    user: CurrentUser = Depends(require_user),
    rest_link: str = Form(...),
    item: Item = Depends(item_form),
    basket_session: BasketSession = Depends(get_basket_session),
):
    """
    Добавляет позицию в корзину. Неавторизованных require_user отправляет на /login.
    """
    validate_restaurant_link(rest_link)
    basket = add_item(basket_session.load(), rest_link, item, user.username)
    basket_session.save(basket)

    logger.info("basket_item_added", restaurant_link=rest_link, item=item.name, total_amount=basket.total_amount)
    return order_view(rest_link)


@router.post("/basket/remove")
def basket_remove(
    item: Item = Depends(item_form),
    basket_session: BasketSession = Depends(get_basket_session),
):
    """
    Убирает одну штуку позиции из корзины.
    """
    basket = remove_item(basket_session.require(), item)
    basket_session.save(basket)

    logger.info("basket_item_removed", restaurant_link=basket.restaurant_link, item=item.name)
    return order_view(basket.restaurant_link)


@router.post("/basket/empty")
def basket_empty(basket_session: BasketSession = Depends(get_basket_session)):
    basket = empty_basket(basket_session.require())
    basket_session.save(basket)

    logger.info("basket_emptied", restaurant_link=basket.restaurant_link)
    return order_view(basket.restaurant_link)


@router.post("/basket/submit")
def basket_submit(
    basket_session: BasketSession = Depends(get_basket_session),
    store: OrderStore = Depends(get_order_store),
):
    """
    Отправляет корзину ресторану и очищает её.
    """
    basket = basket_session.require()
    submit_order(store, basket)
    basket_session.save(basket)
    return order_view(basket.restaurant_link)


@router.get("/basket", response_model=BasketRead)
def get_basket(basket_session: BasketSession = Depends(get_basket_session)):
    basket = basket_session.load()
    if basket is None:
        return BasketRead()
    return basket.to_read()


@router.get("/order/{restaurant_link}", response_model=OrderPage)
def order_page(
    restaurant_link: str,
    basket_session: BasketSession = Depends(get_basket_session),
):
    """
    Страница заказа в ресторане: корзина показывается, только если она из этого ресторана.
    """
    basket = basket_session.load()
    if basket is None or basket.restaurant_link != restaurant_link:
        return OrderPage(restaurant_link=restaurant_link)
    return OrderPage(restaurant_link=restaurant_link, basket=basket.to_read())
