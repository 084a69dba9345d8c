"""
Хранилище заказов по ресторанам.

У каждого ресторана две очереди: текущие и выполненные заказы.
Файловый вариант держит каждую очередь в отдельном JSON и всегда
перезаписывает файл целиком.

Чтение-изменение-запись поверх хранилища не атомарны и ничем не
сериализованы: при двух одновременных отправках в один ресторан
выигрывает последняя запись.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from pydantic import ValidationError

from restaurant_orders.errors import InvalidRestaurantLink, OrderPersistenceError
from restaurant_orders.logger import get_logger
from restaurant_orders.schemas.order import Order, OrderList

logger = get_logger(__name__)

COMPLETED_PREFIX = "completed-"


class OrderStore(ABC):
    """Чтение и запись очередей ресторана целиком."""

    @abstractmethod
    def load_pending(self, restaurant_link: str) -> List[Order]:
        ...

    @abstractmethod
    def save_pending(self, restaurant_link: str, orders: List[Order]) -> None:
        ...

    @abstractmethod
    def load_completed(self, restaurant_link: str) -> List[Order]:
        ...

    @abstractmethod
    def save_completed(self, restaurant_link: str, orders: List[Order]) -> None:
        ...


def validate_restaurant_link(restaurant_link: str) -> str:
    if (
        not restaurant_link
        or restaurant_link.startswith(".")
        or "/" in restaurant_link
        or "\\" in restaurant_link
    ):
        raise InvalidRestaurantLink(f"Invalid restaurant link: {restaurant_link!r}")
    return restaurant_link


class JsonFileOrderStore(OrderStore):
    """Заказы лежат в ``<link>.json`` и ``completed-<link>.json`` одного каталога."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def pending_path(self, restaurant_link: str) -> Path:
        return self.directory / f"{validate_restaurant_link(restaurant_link)}.json"

    def completed_path(self, restaurant_link: str) -> Path:
        return self.directory / f"{COMPLETED_PREFIX}{validate_restaurant_link(restaurant_link)}.json"

    def load_pending(self, restaurant_link: str) -> List[Order]:
        return self._read(self.pending_path(restaurant_link))

    def save_pending(self, restaurant_link: str, orders: List[Order]) -> None:
        self._write(self.pending_path(restaurant_link), orders)

    def load_completed(self, restaurant_link: str) -> List[Order]:
        return self._read(self.completed_path(restaurant_link))

    def save_completed(self, restaurant_link: str, orders: List[Order]) -> None:
        self._write(self.completed_path(restaurant_link), orders)

    def _read(self, path: Path) -> List[Order]:
        # нет файла или он битый - значит заказов нет
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("order_record_unreadable", path=str(path), error=str(exc))
            return []

        try:
            return OrderList.validate_json(raw)
        except (ValidationError, ValueError) as exc:
            logger.warning("order_record_corrupt", path=str(path), error=str(exc))
            return []

    def _write(self, path: Path, orders: List[Order]) -> None:
        payload = json.dumps(OrderList.dump_python(orders, by_alias=True), indent="\t")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            logger.exception("order_record_write_failed", path=str(path))
            raise OrderPersistenceError(f"Could not write {path.name}") from exc
