from pydantic import BaseModel, ConfigDict, Field


# --- Shipping rates ---

class RatesRequest(BaseModel):
    weight: float = Field(allow_inf_nan=False)  # g
    width: float = Field(allow_inf_nan=False)  # cm
    height: float = Field(allow_inf_nan=False)
    depth: float = Field(allow_inf_nan=False)
    us_zip: str | None = Field(default=None, alias="usZip")
    uk_postcode: str | None = Field(default=None, alias="ukPostcode")

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class RateSummaryResponse(BaseModel):
    carrier: str
    service: str
    price: float
    currency: str
    estimated_delivery_dates: str | None = None
    carrier_id: str | None = None


class RatesResultResponse(BaseModel):
    rates: list[RateSummaryResponse]
    errors: list[str]


class DestinationRatesResponse(BaseModel):
    US: RatesResultResponse
    UK: RatesResultResponse


class ServiceInfoResponse(BaseModel):
    carrier: str
    code: str
    label: str
    description: str


# --- Pricing ---

class PriceRequest(BaseModel):
    cost_price: float = Field(default=0, allow_inf_nan=False)
    shipping_fee: float = Field(default=3000, allow_inf_nan=False)
    fee_pct: float = Field(default=21.0, allow_inf_nan=False)
    target_profit_pct: float = Field(default=30.0, allow_inf_nan=False)
    exchange_rate: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    discount_pct: float = Field(default=22.0, allow_inf_nan=False)


class PriceResponse(BaseModel):
    sell_price_jpy: float | None = None
    profit_jpy: float | None = None
    sell_price_usd: float | None = None
    original_price_usd: float | None = None
    us_duty_usd: float | None = None
    error: str | None = None


class ExchangeRateResponse(BaseModel):
    base: str = "USD"
    target: str = "JPY"
    rate: float
    fallback: bool = False


# --- System ---

class ServiceStatus(BaseModel):
    name: str
    status: str  # "ok" / "degraded" / "unavailable"
    detail: str = ""


class HealthResponse(BaseModel):
    status: str
    cached_rate_results: int = 0
    services: list[ServiceStatus] = []
