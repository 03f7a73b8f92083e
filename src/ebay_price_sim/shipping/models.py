"""Rate quote data model.

Ship&Co responses are untrusted JSON, so every field goes through a
coercion helper before it reaches ``RateSummary``.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field
from typing import Any

from .cache import build_cache_key


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


def _as_price(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    return price if math.isfinite(price) else 0.0


@dataclass(frozen=True)
class RateQuoteRequest:
    country: str
    postal: str
    weight: float  # g
    width: float  # cm
    height: float
    depth: float

    def cache_key(self) -> str:
        return build_cache_key(
            self.country, self.weight, self.width, self.height, self.depth, self.postal,
        )


@dataclass(frozen=True)
class RawRateQuote:
    carrier: str = ""
    service: str = ""
    price: float = 0.0
    currency: str = ""
    estimated_delivery_dates: str | None = None
    carrier_id: str | None = None
    errors: list[Any] | None = None

    @classmethod
    def from_api(cls, obj: Any) -> RawRateQuote:
        """Coerce one element of the Ship&Co rates array."""
        if not isinstance(obj, dict):
            return cls()
        errors = obj.get("errors")
        return cls(
            carrier=_as_str(obj.get("carrier")),
            service=_as_str(obj.get("service")),
            price=_as_price(obj.get("price")),
            currency=_as_str(obj.get("currency")),
            estimated_delivery_dates=_as_optional_str(obj.get("estimated_delivery_dates")),
            carrier_id=_as_optional_str(obj.get("carrier_id")),
            errors=list(errors) if isinstance(errors, list) else None,
        )


@dataclass(frozen=True)
class RateSummary:
    carrier: str
    service: str
    price: float
    currency: str
    estimated_delivery_dates: str | None = None
    carrier_id: str | None = None

    @classmethod
    def from_raw(cls, raw: RawRateQuote) -> RateSummary:
        return cls(
            carrier=raw.carrier,
            service=raw.service,
            price=raw.price,
            currency=raw.currency,
            estimated_delivery_dates=raw.estimated_delivery_dates,
            carrier_id=raw.carrier_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RatesResult:
    rates: list[RateSummary] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, country: str, status: int | str, message: str) -> RatesResult:
        """Empty quote list with a single upstream error line."""
        return cls(rates=[], errors=[f"Ship&Co API 失敗 ({country}): {status} {message}"])

    def to_dict(self) -> dict[str, Any]:
        return {
            "rates": [r.to_dict() for r in self.rates],
            "errors": list(self.errors),
        }
