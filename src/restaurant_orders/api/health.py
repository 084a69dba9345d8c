import os
from datetime import datetime

from fastapi import APIRouter, Depends

from .deps import get_order_store
from ..storage.order_store import JsonFileOrderStore, OrderStore

router = APIRouter()

@router.get("/health", summary="Health check")
def health_check(store: OrderStore = Depends(get_order_store)):
    """
    Health-check: жив ли сервис и можно ли писать в каталог заказов.
    """
    orders_dir_writable = None
    if isinstance(store, JsonFileOrderStore):
        directory = store.directory
        # каталог создаётся при первой записи
        while not directory.exists() and directory != directory.parent:
            directory = directory.parent
        orders_dir_writable = os.access(directory, os.W_OK)

    return {
        "status": "ok",
        "timestamp": datetime.now(),
        "orders_dir_writable": orders_dir_writable,
    }
