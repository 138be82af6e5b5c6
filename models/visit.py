"""
models/visit.py
---------------
The import payload: one receipt with its store and product lines,
as produced by the receipt parser.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_datetime(value: Union[str, int, float, datetime]) -> datetime:
    """
    Parse a visit timestamp.

    Accepts an ISO-8601 string (a trailing 'Z' is allowed), a number of
    epoch milliseconds, or a datetime. Returns a naive UTC datetime.

    Raises:
        ValueError: If the value can't be interpreted as a timestamp.
    """
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, bool):
        raise ValueError(f"Invalid visit datetime: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).replace(tzinfo=None)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_utc_naive(datetime.fromisoformat(text))
    raise ValueError(f"Invalid visit datetime: {value!r}")


_MISSING = object()


def _pick(data: dict, *keys: str, default: Any = _MISSING) -> Any:
    """
    Return the first key present in `data` (camelCase or snake_case).

    Raises:
        KeyError: If none of the keys is present and no default is given.
    """
    for key in keys:
        if key in data:
            return data[key]
    if default is _MISSING:
        raise KeyError(keys[0])
    return default


def _number(value: Any, field_name: str) -> float:
    """Convert a payload value to float, raising ValueError for null or non-numeric values."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be a number, got {value!r}") from None


@dataclass
class VisitProduct:
    """One product line of a visit."""
    name: str
    amount: float
    unit_price: float
    total_price: float
    unit: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "VisitProduct":
        name = data["name"]
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Product line without a name: {data!r}")
        return cls(
            name=name,
            unit=data.get("unit"),
            amount=_number(data["amount"], "amount"),
            unit_price=_number(_pick(data, "unitPrice", "unit_price"), "unitPrice"),
            total_price=_number(_pick(data, "totalPrice", "total_price"), "totalPrice"),
        )


@dataclass
class Visit:
    """
    One imported receipt event.

    Attributes:
        id: Receipt identifier; re-importing the same id replaces the receipt.
        store: Store name.
        datetime: Time of the visit (naive UTC).
        total: Receipt total.
        source_pdf: File the receipt was parsed from, if any.
        products: Product lines in receipt order.
    """
    id: str
    store: str
    datetime: datetime
    total: float
    source_pdf: Optional[str] = None
    products: list[VisitProduct] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Visit":
        """
        Build a Visit from a decoded JSON object.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If a value has the wrong shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a visit object, got {type(data).__name__}")
        visit_id = data["id"]
        store = data["store"]
        if visit_id is None or not str(visit_id).strip():
            raise ValueError("Visit id must not be empty")
        if not isinstance(store, str) or not store.strip():
            raise ValueError(f"Visit {visit_id} has no store name")

        # A null product list means a receipt without lines
        lines = data.get("products") or []
        if not isinstance(lines, list):
            raise ValueError(f"Visit {visit_id}: products must be a list")
        if not all(isinstance(p, dict) for p in lines):
            raise ValueError(f"Visit {visit_id}: every product line must be an object")

        return cls(
            id=str(visit_id),
            store=store,
            datetime=parse_datetime(data["datetime"]),
            total=_number(data["total"], "total"),
            source_pdf=_pick(data, "sourcePdf", "source_pdf", default=None),
            products=[VisitProduct.from_dict(p) for p in lines],
        )
