"""Thread-safe in-memory product store."""

import logging
from typing import Dict, List, Optional

from .errors import StoreError
from .locking import RWLock
from .models import Product

logger = logging.getLogger(__name__)

__all__ = ["InMemoryStore", "StoreError"]


class InMemoryStore:
    """Products keyed by id, guarded by a readers/writer lock.

    Every product handed in is copied before it is stored and every product
    handed out is a fresh copy, so callers never share state with the store.
    A missing id is reported by value (``None`` or ``False``), not raised.
    """

    def __init__(self) -> None:
        self._lock = RWLock()
        self._products: Dict[int, Product] = {}
        self._next_id = 1

    def create(self, product: Product) -> Product:
        with self._lock.write_lock():
            pid = self._next_id
            self._next_id += 1
            stored = product.copy(id=pid)
            self._products[pid] = stored
            created = stored.copy()
        logger.debug("Created product %d", pid)
        return created

    def get(self, pid: int) -> Optional[Product]:
        with self._lock.read_lock():
            prod = self._products.get(pid)
            return prod.copy() if prod is not None else None

    def list(self) -> List[Product]:
        with self._lock.read_lock():
            return [prod.copy() for prod in self._products.values()]

    def update(self, pid: int, product: Product) -> Optional[Product]:
        with self._lock.write_lock():
            prod = self._products.get(pid)
            if prod is None:
                return None
            prod.name = product.name
            prod.description = product.description
            prod.price = product.price
            prod.stock = product.stock
            updated = prod.copy()
        logger.debug("Updated product %d", pid)
        return updated

    def delete(self, pid: int) -> bool:
        with self._lock.write_lock():
            if pid not in self._products:
                return False
            del self._products[pid]
        logger.debug("Deleted product %d", pid)
        return True

    def __len__(self) -> int:
        with self._lock.read_lock():
            return len(self._products)
