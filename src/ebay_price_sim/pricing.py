"""Sell price calculation for eBay listings shipped from Japan."""

from __future__ import annotations

from dataclasses import dataclass

US_DUTY_RATE = 0.15  # 想定US関税


@dataclass(frozen=True)
class PriceQuote:
    sell_price_jpy: float
    profit_jpy: float
    sell_price_usd: float  # 割引後の販売価格
    original_price_usd: float  # 割引前の表示価格
    us_duty_usd: float


def required_sell_price(
    cost_price: float,
    shipping_fee: float,
    fee_pct: float,
    target_profit_pct: float,
) -> float:
    """Price at which fees and target profit are both covered.

    Formula: price = (cost_price + shipping_fee) / (1 - (fee + profit) / 100)
    """
    divisor = 1.0 - (fee_pct + target_profit_pct) / 100.0
    if divisor <= 0:
        raise ValueError("Combined fee and profit rates exceed 100%")
    return (cost_price + shipping_fee) / divisor


def calculate_price(
    cost_price: float,
    shipping_fee: float,
    fee_pct: float,
    target_profit_pct: float,
    exchange_rate: float = 0.0,
    discount_pct: float = 0.0,
) -> PriceQuote:
    """Full price breakdown in JPY and USD.

    ``exchange_rate`` is JPY per USD; 0 leaves the USD figures at 0.
    ``discount_pct`` is the sale discount the listed price is marked up for.
    """
    sell_price_jpy = required_sell_price(cost_price, shipping_fee, fee_pct, target_profit_pct)
    profit = sell_price_jpy * target_profit_pct / 100.0
    sell_price_usd = sell_price_jpy / exchange_rate if exchange_rate else 0.0
    discount = discount_pct / 100.0
    original_price_usd = sell_price_usd / (1.0 - discount) if discount < 1 else 0.0
    return PriceQuote(
        sell_price_jpy=sell_price_jpy,
        profit_jpy=profit,
        sell_price_usd=sell_price_usd,
        original_price_usd=original_price_usd,
        us_duty_usd=sell_price_usd * US_DUTY_RATE,
    )
