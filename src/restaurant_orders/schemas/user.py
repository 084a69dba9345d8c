from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from restaurant_orders.models.user import RoleEnum


class UserOut(BaseModel):
    id: int
    username: str
    role: RoleEnum
    restaurant_link: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CurrentUser(BaseModel):
    """
    То, что хранится в слоте "user" сессии после логина.
    """
    username: str
    role: RoleEnum = RoleEnum.customer
    restaurant_link: Optional[str] = None

    @property
    def is_staff(self) -> bool:
        return self.role == RoleEnum.staff and bool(self.restaurant_link)
