"""
logic.py - 핵심 비즈니스 로직 (v1.0 MarginCalculator)

DDD 원칙: 외부 의존성 없는 순수 파이썬 코드
- UI 프레임워크 독립적
- 테스트 용이

원가 + (마진% 또는 희망 판매가) 중 기준 필드 하나로 나머지를 산출한다.
입력 중인 값이 숫자가 아니거나 계산 결과가 음수/무한대이면 예외 없이 0으로 처리.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional

from .models import (
    ActiveDriver,
    FreightType,
    MarginInput,
    MarginResult,
)
from ..core.config import AppConfig, DEFAULT_CONFIG
from ..utils.helpers import (
    HUNDRED,
    ZERO,
    format_currency,
    format_fixed,
    format_percent,
    is_displayable,
    safe_divide,
    to_decimal,
)

logger = logging.getLogger(__name__)


def _non_negative(value: Decimal) -> Decimal:
    """NaN/무한대/음수, 표시 불가한 크기 → 0"""
    if not is_displayable(value) or value < 0:
        return ZERO
    return value


class MarginCalculator:
    """마진 / 판매가 양방향 계산기"""

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Args:
            config: 애플리케이션 설정. None이면 기본값 사용.
        """
        self.config = config or DEFAULT_CONFIG

    def sale_price_from_margin(self, cost: Decimal, margin_percent: Decimal) -> Decimal:
        """판매가 = 원가 / (1 - 마진/100). 마진 100% 이상이면 0"""
        denominator = 1 - margin_percent / HUNDRED
        if denominator <= 0:
            return ZERO
        return _non_negative(cost / denominator)

    def margin_from_sale_price(self, cost: Decimal, sale_price: Decimal) -> Decimal:
        """마진 = (판매가 - 원가) / 판매가 * 100. 판매가 0이면 0"""
        return _non_negative(safe_divide(sale_price - cost, sale_price) * HUNDRED)

    def margin_on_sale(self, cost: Decimal, sale_price: Decimal) -> Decimal:
        """판매가 대비 마진 (표시용). 판매가가 원가보다 낮으면 음수 그대로"""
        if sale_price <= 0:
            return ZERO
        margin = (sale_price - cost) / sale_price * HUNDRED
        return margin if is_displayable(margin) else ZERO

    def compute(self, data: MarginInput) -> MarginResult:
        """계산 실행

        Args:
            data: 계산기 입력 (원시 문자열 허용)

        Returns:
            MarginResult: 유효 판매가, 마진, 판매가 대비 마진
        """
        cost = to_decimal(data.cost)
        cost_valid = cost is not None and cost >= 0
        effective_cost = cost if cost_valid else ZERO

        if data.active_driver == ActiveDriver.MARGIN:
            margin = to_decimal(data.margin_percent)
            sale_price = ZERO
            if cost_valid and margin is not None:
                sale_price = self.sale_price_from_margin(cost, margin)

            margin_field = margin if margin is not None else ZERO
            derived_text = format_fixed(sale_price) if sale_price > 0 else ""
        else:
            typed = to_decimal(data.desired_sale_price)
            sale_price = typed if typed is not None and typed > 0 else ZERO

            margin_field = ZERO
            if cost_valid and sale_price > 0:
                margin_field = self.margin_from_sale_price(cost, sale_price)
            derived_text = format_fixed(margin_field) if margin_field > 0 else ""

        result = MarginResult(
            cost=effective_cost,
            sale_price=sale_price,
            margin_percent=margin_field,
            margin_on_sale=self.margin_on_sale(effective_cost, sale_price),
            derived_text=derived_text,
        )
        logger.debug(
            f"compute driver={data.active_driver.value} cost={effective_cost} "
            f"sale={sale_price} margin_on_sale={result.margin_on_sale}"
        )
        return result

    def describe(self, result: MarginResult) -> Dict[str, str]:
        """결과 패널 표시용 문자열"""
        return {
            "Valor de Custo": format_currency(result.cost, self.config),
            "Valor de Venda": format_currency(result.sale_price, self.config),
            "Margem sobre a Venda": format_percent(result.margin_on_sale),
        }


@dataclass
class CalculatorState:
    """계산기 화면 상태

    필드 문자열과 기준 필드(active_driver)를 보관하고,
    reconcile()에서 비기준 필드를 다시 채운다 (무효하면 비움).
    """
    cost_text: str = ""
    margin_text: str = ""
    sale_price_text: str = ""
    active_driver: ActiveDriver = ActiveDriver.MARGIN
    freight: FreightType = FreightType.CIF

    def edit_cost(self, text: str) -> None:
        self.cost_text = text

    def edit_margin(self, text: str) -> None:
        self.margin_text = text
        self.active_driver = ActiveDriver.MARGIN

    def edit_sale_price(self, text: str) -> None:
        self.sale_price_text = text
        self.active_driver = ActiveDriver.SALE_PRICE

    def activate(self, driver: ActiveDriver) -> None:
        """기준 필드 전환 (값은 그대로, 다음 reconcile에서 반대 필드 재계산)"""
        self.active_driver = driver

    def select_freight(self, freight: FreightType) -> None:
        self.freight = freight

    def to_input(self) -> MarginInput:
        return MarginInput(
            cost=self.cost_text,
            active_driver=self.active_driver,
            margin_percent=self.margin_text,
            desired_sale_price=self.sale_price_text,
        )

    def is_locked(self, driver: ActiveDriver) -> bool:
        """비기준 필드는 읽기 전용"""
        return driver != self.active_driver

    def reconcile(self, calculator: MarginCalculator) -> MarginResult:
        """계산 후 비기준 필드 갱신"""
        result = calculator.compute(self.to_input())
        if self.active_driver == ActiveDriver.MARGIN:
            self.sale_price_text = result.derived_text
        else:
            self.margin_text = result.derived_text
        return result
