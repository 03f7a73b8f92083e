"""Service catalog for the carriers shown in the calculator UI."""

from __future__ import annotations

from dataclasses import dataclass

from .filters import JAPAN_POST_SERVICES
from .models import RateSummary, RatesResult


@dataclass(frozen=True)
class ServiceInfo:
    carrier: str  # 表示用キャリア名
    code: str  # Ship&Co service identifier
    label: str
    description: str


DHL_SERVICES = (
    ServiceInfo(
        "DHL", "dhl_express_0900",
        "DHL Express 09:00（午前9時まで配達）",
        "最速。対応エリア限定で、翌営業日9:00までの時間指定配達",
    ),
    ServiceInfo(
        "DHL", "dhl_express_1200",
        "DHL Express 12:00（正午まで配達）",
        "速達。対応エリア限定で、翌営業日12:00までの時間指定配達",
    ),
    ServiceInfo(
        "DHL", "dhl_express_worldwide",
        "DHL Express Worldwide（通常速達）",
        "DHLの標準国際速達。営業日中（EOD）までに配達",
    ),
)

FEDEX_SERVICES = (
    ServiceInfo(
        "FedEx", "fedex_international_priority_express",
        "FedEx International Priority Express",
        "最速クラス。地域により午前中（10:30/12:00）までの配達",
    ),
    ServiceInfo(
        "FedEx", "fedex_international_priority_eod",
        "FedEx International Priority（EOD）",
        "速達。営業日中（End of Day）までに配達",
    ),
    ServiceInfo(
        "FedEx", "fedex_international_economy",
        "FedEx International Economy",
        "優先便より遅いが料金を抑えた国際配送",
    ),
    ServiceInfo(
        "FedEx", "fedex_international_connect_plus",
        "FedEx International Connect Plus（EC向け）",
        "eコマース向け。配達日確定型で比較的安価",
    ),
)

JAPAN_POST_SERVICE_INFO = (
    ServiceInfo(
        "Japan Post", "japanpost_ems",
        "EMS（国際スピード郵便）",
        "日本郵便の最速国際便。追跡・補償あり",
    ),
    ServiceInfo(
        "Japan Post", "japanpost_epacket_light",
        "国際eパケットライト",
        "小型・軽量向け。安価だが国・地域により取扱停止あり",
    ),
    ServiceInfo(
        "Japan Post", "japanpost_smallpacket_air",
        "小型包装物（航空便）",
        "安価な航空便。国・地域・時期により利用不可の場合あり",
    ),
)


def all_services() -> list[ServiceInfo]:
    return [*DHL_SERVICES, *FEDEX_SERVICES, *JAPAN_POST_SERVICE_INFO]


def _catalog_for(carrier: str) -> tuple[ServiceInfo, ...]:
    name = carrier.lower()
    if name == "dhl":
        return DHL_SERVICES
    if name == "fedex":
        return FEDEX_SERVICES
    if "japan" in name:
        return JAPAN_POST_SERVICE_INFO
    return ()


def get_service_info(carrier: str, service: str) -> ServiceInfo | None:
    for info in _catalog_for(carrier):
        if info.code == service:
            return info
    return None


def format_carrier(carrier: str) -> str:
    name = carrier.lower()
    if name == "fedex":
        return "FedEx"
    if name == "dhl":
        return "DHL"
    if "japan" in name:
        return "Japan Post"
    return carrier


def format_service_label(rate: RateSummary) -> str:
    info = get_service_info(rate.carrier, rate.service)
    return info.label if info else rate.service


def _cheapest(rates: list[RateSummary]) -> list[RateSummary]:
    if not rates:
        return []
    return [min(rates, key=lambda r: r.price)]


def select_display_rates(result: RatesResult) -> list[RateSummary]:
    """Pick what the rate card shows.

    Cheapest catalogued DHL service, cheapest catalogued FedEx service,
    then every catalogued Japan Post service in response order.
    """
    dhl = [
        r for r in result.rates
        if r.carrier.lower() == "dhl" and get_service_info(r.carrier, r.service)
    ]
    fedex = [
        r for r in result.rates
        if r.carrier.lower() == "fedex" and get_service_info(r.carrier, r.service)
    ]
    japan_post = [
        r for r in result.rates
        if "japan" in r.carrier.lower() and r.service in JAPAN_POST_SERVICES
    ]
    return [*_cheapest(dhl), *_cheapest(fedex), *japan_post]
