from pydantic import BaseModel, Field, TypeAdapter
from typing import Dict, List


class Order(BaseModel):
    """
    Снимок корзины на момент отправки: только названия и количества,
    цена и ссылка позиции не сохраняются.
    """
    completed: bool = False
    items_info: Dict[str, int] = Field(default_factory=dict, alias="itemsInfo")
    buyer: str = ""
    total_amount: str = Field("", alias="totalAmount")

    class Config:
        populate_by_name = True


OrderList = TypeAdapter(List[Order])


class OrdersRead(BaseModel):
    restaurant_link: str
    pending: List[Order] = []
    completed: List[Order] = []
