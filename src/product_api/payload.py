"""Decoding and validation of request data.

Bodies are decoded into :class:`Product` by explicit field checks: ``name``
and ``price`` are required, ``description`` and ``stock`` are optional, and
any ``id`` in the body is ignored because ids are assigned by the store.
"""

import math
import re
from typing import Any

from .errors import PayloadError
from .models import Product

_ID_RE = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_id(raw: str) -> int:
    if not _ID_RE.fullmatch(raw or ""):
        raise PayloadError("invalid id")
    pid = int(raw)
    if not INT64_MIN <= pid <= INT64_MAX:
        raise PayloadError("invalid id")
    return pid


def _is_number(value: Any) -> bool:
    # bool is an int subclass but true/false is not a price
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_product(data: Any) -> Product:
    if not isinstance(data, dict):
        raise PayloadError("request body must be a JSON object")

    name = data.get("name")
    if name is None:
        raise PayloadError("name is required")
    if not isinstance(name, str) or name == "":
        raise PayloadError("name must be a non-empty string")

    price = data.get("price")
    if price is None:
        raise PayloadError("price is required")
    if not _is_number(price):
        raise PayloadError("price must be a number")
    try:
        price = float(price)
    except OverflowError:
        raise PayloadError("price is out of range") from None
    if not math.isfinite(price):
        raise PayloadError("price must be a finite number")

    description = data.get("description")
    if description is None:
        description = ""
    elif not isinstance(description, str):
        raise PayloadError("description must be a string")

    stock = data.get("stock")
    if stock is None:
        stock = 0
    elif not isinstance(stock, int) or isinstance(stock, bool):
        raise PayloadError("stock must be an integer")
    elif not INT64_MIN <= stock <= INT64_MAX:
        raise PayloadError("stock is out of range")

    return Product(name=name, price=price, description=description, stock=stock)
