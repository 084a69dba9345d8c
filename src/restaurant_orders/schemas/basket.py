from pydantic import BaseModel, Field, conint
from typing import Dict, List, Optional


class Item(BaseModel):
    """
    Позиция меню. Неизменяемая, сравнивается и хешируется по всем трём полям,
    поэтому служит ключом корзины.
    """
    name: str
    price: str
    link: str

    class Config:
        frozen = True


class BasketLine(BaseModel):
    name: str
    price: str
    link: str
    quantity: conint(ge=1)


class BasketRead(BaseModel):
    """
    Корзина в виде, пригодном для JSON: так она лежит в сессии и так отдаётся клиенту.
    """
    restaurant_link: str = ""
    total_amount: str = "0.00"
    user_name: str = ""
    lines: List[BasketLine] = []


class Basket(BaseModel):
    restaurant_link: str
    items: Dict[Item, int] = Field(default_factory=dict)
    total_amount: str = "0.00"
    user_name: str = ""

    def to_read(self) -> BasketRead:
        return BasketRead(
            restaurant_link=self.restaurant_link,
            total_amount=self.total_amount,
            user_name=self.user_name,
            lines=[
                BasketLine(name=item.name, price=item.price, link=item.link, quantity=quantity)
                for item, quantity in self.items.items()
            ],
        )

    def to_session(self) -> dict:
        return self.to_read().model_dump()

    @classmethod
    def from_session(cls, data) -> "Basket":
        stored = BasketRead.model_validate(data)
        items = {
            Item(name=line.name, price=line.price, link=line.link): line.quantity
            for line in stored.lines
        }
        return cls(
            restaurant_link=stored.restaurant_link,
            items=items,
            total_amount=stored.total_amount,
            user_name=stored.user_name,
        )


class OrderPage(BaseModel):
    restaurant_link: str
    basket: Optional[BasketRead] = None
