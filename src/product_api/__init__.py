"""In-memory product catalogue served over HTTP."""

from .errors import PayloadError, ProductAPIError, StoreError
from .models import Product
from .store import InMemoryStore

__all__ = ["InMemoryStore", "PayloadError", "Product", "ProductAPIError", "StoreError"]
__version__ = "1.0.0"
