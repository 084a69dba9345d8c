from typing import Optional

from fastapi import APIRouter, Depends, Form
from sqlalchemy.ext.asyncio import AsyncSession

from ..crud.user import authenticate, create_user
from ..errors import InvalidCredentials
from ..db.session import get_async_session
from ..logger import get_logger
from ..schemas.user import CurrentUser, UserOut
from .deps import USER_SLOT, get_current_user, get_session

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


@router.post("/register", response_model=UserOut, status_code=201)
async def register(
    username: str = Form(...),
    password: str = Form(...),
    restaurant_link: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Регистрирует покупателя, а с restaurant_link - сотрудника ресторана.
    """
    user = await create_user(db, username, password, restaurant_link)
    logger.info("user_registered", username=user.username, role=user.role.value)
    return user


@router.post("/login", response_model=UserOut)
async def login(
    username: str = Form(...),
    password: str = Form(...),
    db: AsyncSession = Depends(get_async_session),
    session: dict = Depends(get_session),
):
    try:
        user = await authenticate(db, username, password)
    except InvalidCredentials:
        logger.info("login_failed", username=username)
        raise

    session[USER_SLOT] = CurrentUser(
        username=user.username,
        role=user.role,
        restaurant_link=user.restaurant_link,
    ).model_dump(mode="json")
    return user


@router.post("/logout", status_code=204)
def logout(session: dict = Depends(get_session)):
    session.clear()


@router.get("/users/me", response_model=Optional[CurrentUser])
def me(user: Optional[CurrentUser] = Depends(get_current_user)):
    return user
