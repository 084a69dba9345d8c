from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from restaurant_orders.errors import InvalidCredentials, UserAlreadyExists
from restaurant_orders.models import RoleEnum, User
from restaurant_orders.storage.order_store import validate_restaurant_link


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalars().first()


async def create_user(
    db: AsyncSession,
    username: str,
    password: str,
    restaurant_link: Optional[str] = None,
) -> User:
    """
    Создаёт пользователя. С restaurant_link это персонал ресторана.
    """
    if restaurant_link:
        validate_restaurant_link(restaurant_link)

    if await get_user_by_username(db, username):
        raise UserAlreadyExists()

    user = User(
        username=username,
        password_hash=generate_password_hash(password),
        role=RoleEnum.staff if restaurant_link else RoleEnum.customer,
        restaurant_link=restaurant_link or None,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise UserAlreadyExists()
    await db.refresh(user)
    return user


async def authenticate(db: AsyncSession, username: str, password: str) -> User:
    user = await get_user_by_username(db, username)
    if not user or not check_password_hash(user.password_hash, password):
        raise InvalidCredentials()
    return user
