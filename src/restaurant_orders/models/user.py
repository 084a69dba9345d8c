import enum
from sqlalchemy import Column, Integer, String, DateTime, func, Enum
from ..db.base import Base


class RoleEnum(str, enum.Enum):
    customer = "customer"
    staff = "staff"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(RoleEnum, name="user_role"), nullable=False, default=RoleEnum.customer)
    restaurant_link = Column(String(128), nullable=True)  # только у персонала ресторана
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
