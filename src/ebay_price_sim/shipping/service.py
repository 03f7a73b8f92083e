"""Fan-out of rate lookups to the two supported destinations."""

from __future__ import annotations

import asyncio
import logging

from ..config import settings
from .client import ShipAndCoClient
from .models import RatesResult

logger = logging.getLogger(__name__)

# (response key, Ship&Co country code)
DESTINATIONS = (("US", "US"), ("UK", "GB"))


def normalize_postal(value: str | None, default: str) -> str:
    if value is None:
        return default
    return value.strip() or default


async def get_destination_rates(
    client: ShipAndCoClient,
    weight: float,
    width: float,
    height: float,
    depth: float,
    us_zip: str | None = None,
    uk_postcode: str | None = None,
) -> dict[str, RatesResult]:
    """Fetch US and UK rates concurrently.

    Each side completes on its own: an exception on one destination is
    turned into an error entry for that destination only.
    """
    postals = {
        "US": normalize_postal(us_zip, settings.default_us_zip),
        "UK": normalize_postal(uk_postcode, settings.default_uk_postcode),
    }
    outcomes = await asyncio.gather(
        *(
            client.fetch_rates(country, postals[key], weight, width, height, depth)
            for key, country in DESTINATIONS
        ),
        return_exceptions=True,
    )

    results: dict[str, RatesResult] = {}
    for (key, country), outcome in zip(DESTINATIONS, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.exception("Rate lookup for %s failed", country, exc_info=outcome)
            results[key] = RatesResult.failed(country, "error", str(outcome) or type(outcome).__name__)
        else:
            results[key] = outcome
    return results
