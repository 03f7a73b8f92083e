"""Carrier allow-list and missing-service diagnostics."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from .models import RateSummary, RatesResult, RawRateQuote

JAPAN_POST_SERVICES = (
    "japanpost_ems",
    "japanpost_epacket_light",
    "japanpost_smallpacket_air",
)

# 取得できなかった日本郵便サービスのエラー表示ラベル
JAPAN_POST_MISSING_LABELS = {
    "japanpost_ems": "EMS",
    "japanpost_epacket_light": "eパケットライト",
    "japanpost_smallpacket_air": "小型包装物（航空）",
}


def is_japan_post(carrier: str) -> bool:
    name = carrier.lower()
    return "japan post" in name or "japanpost" in name


def is_allowed(raw: RawRateQuote) -> bool:
    """DHL and FedEx pass with any service; Japan Post only for known services.

    Other carriers are dropped without a diagnostic.
    """
    carrier = raw.carrier.lower()
    if "dhl" in carrier:
        return True
    if "fedex" in carrier:
        return True
    if is_japan_post(carrier):
        return raw.service in JAPAN_POST_SERVICES
    return False


def _error_message(entry: Any) -> str:
    if isinstance(entry, dict) and entry.get("message"):
        return str(entry["message"])
    return json.dumps(entry, ensure_ascii=False, default=str)


def collect_api_errors(raw_quotes: Iterable[RawRateQuote]) -> list[str]:
    """Flatten per-quote ``errors`` lists in encounter order."""
    messages: list[str] = []
    for raw in raw_quotes:
        if raw.errors is None:
            continue
        messages.extend(_error_message(entry) for entry in raw.errors)
    return messages


def missing_service_errors(rates: Iterable[RateSummary]) -> list[str]:
    present = {r.service for r in rates if "japan" in r.carrier.lower()}
    return [
        f"{JAPAN_POST_MISSING_LABELS[code]}：非対応/取得失敗"
        for code in JAPAN_POST_SERVICES
        if code not in present
    ]


def filter_and_annotate(raw_quotes: Iterable[Any]) -> RatesResult:
    """Turn a raw Ship&Co rates array into a displayable result.

    Errors list API-reported errors first, then one line per expected
    Japan Post service that is absent from the accepted rates.
    """
    coerced = [RawRateQuote.from_api(obj) for obj in raw_quotes]
    rates = [RateSummary.from_raw(raw) for raw in coerced if is_allowed(raw)]
    errors = collect_api_errors(coerced)
    errors.extend(missing_service_errors(rates))
    return RatesResult(rates=rates, errors=errors)
