from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from .api import health, users
from .config import settings
from .errors import FormDecodeFailure, LoginRequired, RestaurantOrdersError
from .logger import configure_logging, get_logger
from restaurant_orders.api.routes.basket import router as basket_router
from restaurant_orders.api.routes.orders import router as orders_router

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("application_started", orders_dir=settings.ORDERS_DIR)
    yield
    logger.info("application_stopped")


app = FastAPI(title="Restaurant Orders", lifespan=lifespan)

# Сессии в подписанной cookie, ключ задаётся один раз при старте
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY)


@app.exception_handler(RestaurantOrdersError)
async def restaurant_orders_error_handler(request: Request, exc: RestaurantOrdersError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse(exc.location, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def form_decode_error_handler(request: Request, exc: RequestValidationError):
    error = FormDecodeFailure()
    logger.error("form_decode_failed", path=request.url.path, errors=exc.errors())
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


# Подключаем роуты
app.include_router(health.router)
app.include_router(users.router)
app.include_router(basket_router)
app.include_router(orders_router)


def run():
    import uvicorn
    uvicorn.run(
        "restaurant_orders.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
