from typing import Optional

from fastapi import Depends, Request
from pydantic import ValidationError

from restaurant_orders.config import settings
from restaurant_orders.errors import (
    BasketMissing,
    LoginRequired,
    NotAuthorized,
    SessionTypeMismatch,
    SessionUnavailable,
)
from restaurant_orders.logger import get_logger
from restaurant_orders.schemas.basket import Basket
from restaurant_orders.schemas.user import CurrentUser
from restaurant_orders.storage.order_store import JsonFileOrderStore, OrderStore

logger = get_logger(__name__)

BASKET_SLOT = "basket"
USER_SLOT = "user"


class BasketSession:
    """
    Обёртка над сессией запроса: слот "basket" хранит корзину или пуст.
    """

    def __init__(self, session: dict):
        self.session = session

    def load(self) -> Optional[Basket]:
        raw = self.session.get(BASKET_SLOT)
        if raw is None:
            return None
        try:
            return Basket.from_session(raw)
        except ValidationError as exc:
            logger.warning("session_basket_invalid", error=str(exc))
            raise SessionTypeMismatch() from exc

    def require(self) -> Basket:
        basket = self.load()
        if basket is None:
            raise BasketMissing()
        return basket

    def save(self, basket: Basket) -> None:
        self.session[BASKET_SLOT] = basket.to_session()


def get_session(request: Request) -> dict:
    # без SessionMiddleware в scope нет "session", а request.session падает на assert
    if "session" not in request.scope:
        raise SessionUnavailable()
    return request.session


def get_basket_session(session: dict = Depends(get_session)) -> BasketSession:
    return BasketSession(session)


def get_current_user(session: dict = Depends(get_session)) -> Optional[CurrentUser]:
    raw = session.get(USER_SLOT)
    if raw is None:
        return None
    try:
        return CurrentUser.model_validate(raw)
    except ValidationError:
        logger.warning("session_user_invalid")
        return None


def require_user(user: Optional[CurrentUser] = Depends(get_current_user)) -> CurrentUser:
    """
    Неавторизованного отправляет на /login до разбора формы.
    """
    if user is None:
        raise LoginRequired()
    return user


def require_staff(user: Optional[CurrentUser] = Depends(get_current_user)) -> CurrentUser:
    if user is None or not user.is_staff:
        raise NotAuthorized()
    return user


# Хранилище заказов создаётся один раз, как движок БД в db/session.py
order_store = JsonFileOrderStore(settings.ORDERS_DIR)


def get_order_store() -> OrderStore:
    return order_store
