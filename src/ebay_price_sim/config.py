from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    host: str = "127.0.0.1"
    port: int = 8002

    # Ship&Co rates API
    shipandco_api_key: str = ""
    shipandco_api_url: str = "https://api.shipandco.com/v1/rates"
    shipandco_request_timeout: float = 20.0

    # 宛先デフォルト（未入力・空白時）
    default_us_zip: str = "10001"
    default_uk_postcode: str = "SW1A 1AA"

    @property
    def shipandco_enabled(self) -> bool:
        return bool(self.shipandco_api_key)

    # Exchange rate (USD→JPY)
    exchange_rate_url: str = "https://api.exchangerate.host/latest?base=USD&symbols=JPY"
    exchange_rate_proxy: str = ""  # e.g. "https://corsproxy.io/?"
    exchange_rate_fallback: float = 145.0
    exchange_rate_timeout: float = 10.0

    # Calculator defaults
    default_shipping_fee: int = 3000      # 送料 (円)
    default_fee_pct: float = 21.0         # 手数料率 (%)
    default_target_profit_pct: float = 30.0  # 希望利益率 (%)
    default_discount_pct: float = 22.0    # 割引率 (%)
    default_weight: float = 500           # g
    default_width: float = 20             # cm
    default_height: float = 10
    default_depth: float = 10

    # Log
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
