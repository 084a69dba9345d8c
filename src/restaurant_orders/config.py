from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./restaurant_orders.db"
    SECRET_KEY: str = "change-me"
    ORDERS_DIR: str = "orders"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"

settings = Settings()
