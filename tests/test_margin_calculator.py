"""
test_margin_calculator.py - MarginCalculator / CalculatorState 단위 테스트

1. 마진 → 판매가, 판매가 → 마진
2. 마진 ↔ 판매가 왕복
3. 무효 입력 (마진 100% 이상, 숫자 아님, 판매가 0)
4. 기준 필드 전환 시 비기준 필드 재계산/비움
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

# 경로 설정
sys.path.insert(0, str(Path(__file__).parent.parent))

from precifica.domain.models import ActiveDriver, FreightType, MarginInput
from precifica.domain.logic import MarginCalculator, CalculatorState
from precifica.utils.helpers import quantize


class TestMarginDriver:
    """마진(%) 기준 계산"""

    def setup_method(self):
        self.calculator = MarginCalculator()

    def test_sale_price_from_margin(self):
        """원가 100, 마진 20% → 판매가 125"""
        result = self.calculator.compute(
            MarginInput(cost=100, active_driver=ActiveDriver.MARGIN, margin_percent=20)
        )
        assert result.sale_price == Decimal("125")
        assert quantize(result.margin_on_sale) == Decimal("20.00")
        assert result.derived_text == "125.00"

    def test_text_inputs(self):
        """문자열 입력 (쉼표 소수점 포함)"""
        result = self.calculator.compute(
            MarginInput(cost="100", active_driver=ActiveDriver.MARGIN, margin_percent="20,0")
        )
        assert result.sale_price == Decimal("125")

    @pytest.mark.parametrize("margin", [100, 150, "100"])
    def test_margin_at_or_above_100(self, margin):
        """마진 100% 이상 → 판매가 0 (무한대/음수 아님)"""
        result = self.calculator.compute(
            MarginInput(cost=100, active_driver=ActiveDriver.MARGIN, margin_percent=margin)
        )
        assert result.sale_price == 0
        assert result.margin_on_sale == 0
        assert result.derived_text == ""

    @pytest.mark.parametrize("margin", [None, "", "abc", "NaN", "Infinity"])
    def test_margin_not_numeric(self, margin):
        """마진 숫자 아님 → 0, 예외 없음"""
        result = self.calculator.compute(
            MarginInput(cost=100, active_driver=ActiveDriver.MARGIN, margin_percent=margin)
        )
        assert result.sale_price == 0
        assert result.derived_text == ""

    def test_cost_missing(self):
        """원가 없음 → 계산 안 함"""
        result = self.calculator.compute(
            MarginInput(cost="", active_driver=ActiveDriver.MARGIN, margin_percent=20)
        )
        assert result.cost == 0
        assert result.sale_price == 0

    def test_negative_cost_collapses(self):
        """음수 원가 → 0"""
        result = self.calculator.compute(
            MarginInput(cost=-50, active_driver=ActiveDriver.MARGIN, margin_percent=20)
        )
        assert result.sale_price == 0

    def test_zero_margin(self):
        """마진 0% → 판매가 = 원가"""
        result = self.calculator.compute(
            MarginInput(cost=80, active_driver=ActiveDriver.MARGIN, margin_percent=0)
        )
        assert result.sale_price == Decimal("80")
        assert result.margin_on_sale == 0


class TestSalePriceDriver:
    """판매가 기준 계산"""

    def setup_method(self):
        self.calculator = MarginCalculator()

    def test_margin_from_sale_price(self):
        """원가 100, 판매가 125 → 마진 20%"""
        result = self.calculator.compute(
            MarginInput(cost=100, active_driver=ActiveDriver.SALE_PRICE, desired_sale_price=125)
        )
        assert quantize(result.margin_percent) == Decimal("20.00")
        assert quantize(result.margin_on_sale) == Decimal("20.00")
        assert result.sale_price == Decimal("125")
        assert result.derived_text == "20.00"

    @pytest.mark.parametrize("sale_price", [0, "0", None, "", "x"])
    def test_sale_price_invalid(self, sale_price):
        """판매가 0/없음 → 마진 0"""
        result = self.calculator.compute(
            MarginInput(cost=100, active_driver=ActiveDriver.SALE_PRICE, desired_sale_price=sale_price)
        )
        assert result.margin_percent == 0
        assert result.margin_on_sale == 0
        assert result.derived_text == ""

    def test_sale_below_cost(self):
        """판매가 < 원가: 마진 필드는 비우고, 판매가 대비 마진은 손실로 표시"""
        result = self.calculator.compute(
            MarginInput(cost=100, active_driver=ActiveDriver.SALE_PRICE, desired_sale_price=80)
        )
        assert result.margin_percent == 0
        assert result.derived_text == ""
        assert quantize(result.margin_on_sale) == Decimal("-25.00")

    def test_negative_sale_price(self):
        """음수 판매가 → 판매가 0"""
        result = self.calculator.compute(
            MarginInput(cost=5, active_driver=ActiveDriver.SALE_PRICE, desired_sale_price=-10)
        )
        assert result.sale_price == 0
        assert result.margin_percent == 0

    def test_margin_field_ignored(self):
        """판매가 기준일 때 입력된 마진값은 사용하지 않음"""
        result = self.calculator.compute(
            MarginInput(
                cost=100,
                active_driver=ActiveDriver.SALE_PRICE,
                margin_percent=50,
                desired_sale_price=125,
            )
        )
        assert quantize(result.margin_percent) == Decimal("20.00")


class TestRoundTrip:
    """마진 → 판매가 → 마진 왕복"""

    def setup_method(self):
        self.calculator = MarginCalculator()

    @pytest.mark.parametrize("cost,margin", [
        ("100", "20"),
        ("3", "33"),
        ("0.8", "47.5"),
        ("1234.56", "12.34"),
        ("10", "99.9"),
    ])
    def test_round_trip(self, cost, margin):
        """왕복 결과가 반올림 오차 내에서 원래 마진과 같음"""
        forward = self.calculator.compute(
            MarginInput(cost=cost, active_driver=ActiveDriver.MARGIN, margin_percent=margin)
        )
        backward = self.calculator.compute(
            MarginInput(
                cost=cost,
                active_driver=ActiveDriver.SALE_PRICE,
                desired_sale_price=forward.sale_price,
            )
        )
        assert abs(backward.margin_percent - Decimal(margin)) < Decimal("0.0001")


class TestDescribe:
    """결과 패널 문자열"""

    def setup_method(self):
        self.calculator = MarginCalculator()

    def test_describe_margin_driver(self):
        result = self.calculator.compute(
            MarginInput(cost=100, active_driver=ActiveDriver.MARGIN, margin_percent=20)
        )
        assert self.calculator.describe(result) == {
            "Valor de Custo": "R$\xa0100,00",
            "Valor de Venda": "R$\xa0125,00",
            "Margem sobre a Venda": "20.00%",
        }

    def test_describe_empty(self):
        """입력 없음 → 모두 0"""
        result = self.calculator.compute(MarginInput(cost=""))
        assert self.calculator.describe(result) == {
            "Valor de Custo": "R$\xa00,00",
            "Valor de Venda": "R$\xa00,00",
            "Margem sobre a Venda": "0.00%",
        }


class TestCalculatorState:
    """화면 상태 재계산"""

    def setup_method(self):
        self.calculator = MarginCalculator()
        self.state = CalculatorState()

    def test_edit_margin_fills_sale_price(self):
        """마진 입력 → 판매가 필드 채움"""
        self.state.edit_cost("100")
        self.state.edit_margin("20")
        self.state.reconcile(self.calculator)
        assert self.state.active_driver == ActiveDriver.MARGIN
        assert self.state.sale_price_text == "125.00"

    def test_edit_sale_price_fills_margin(self):
        """판매가 입력 → 마진 필드 채움"""
        self.state.edit_cost("100")
        self.state.edit_sale_price("125")
        self.state.reconcile(self.calculator)
        assert self.state.active_driver == ActiveDriver.SALE_PRICE
        assert self.state.margin_text == "20.00"

    def test_invalid_derived_value_clears_field(self):
        """산출값이 무효하면 비기준 필드를 비움 (이전 값 유지 안 함)"""
        self.state.edit_cost("100")
        self.state.edit_margin("20")
        self.state.reconcile(self.calculator)
        assert self.state.sale_price_text == "125.00"

        self.state.edit_margin("100")
        self.state.reconcile(self.calculator)
        assert self.state.sale_price_text == ""

    def test_switch_driver_recomputes(self):
        """기준 전환 후 반대 필드 재계산"""
        self.state.edit_cost("100")
        self.state.edit_margin("20")
        self.state.reconcile(self.calculator)

        self.state.activate(ActiveDriver.SALE_PRICE)
        self.state.edit_cost("50")
        self.state.reconcile(self.calculator)
        # 판매가 125.00 유지, 마진 재계산: (125 - 50) / 125 = 60%
        assert self.state.sale_price_text == "125.00"
        assert self.state.margin_text == "60.00"

    def test_switch_driver_with_stale_sale_price(self):
        """판매가가 원가보다 낮아지면 마진 필드를 비움"""
        self.state.edit_cost("100")
        self.state.edit_sale_price("125")
        self.state.reconcile(self.calculator)
        self.state.edit_cost("200")
        self.state.reconcile(self.calculator)
        assert self.state.margin_text == ""

    def test_is_locked(self):
        """비기준 필드만 읽기 전용"""
        assert self.state.is_locked(ActiveDriver.SALE_PRICE)
        assert not self.state.is_locked(ActiveDriver.MARGIN)
        self.state.edit_sale_price("10")
        assert self.state.is_locked(ActiveDriver.MARGIN)

    def test_freight_has_no_numeric_effect(self):
        """운임 조건은 계산에 영향 없음"""
        self.state.edit_cost("100")
        self.state.edit_margin("20")
        cif = self.state.reconcile(self.calculator)
        self.state.select_freight(FreightType.FOB)
        fob = self.state.reconcile(self.calculator)
        assert cif == fob


class TestFreightType:
    """운임 조건 안내 문구"""

    def test_labels(self):
        assert FreightType.CIF.label == "CIF (Custo, Seguro e Frete)"
        assert FreightType.FOB.label == "FOB (Livre a Bordo)"

    def test_explanations(self):
        assert FreightType.CIF.explanation.startswith("CIF: O vendedor")
        assert FreightType.FOB.explanation.startswith("FOB: O comprador")


class TestExtremeInputs:
    """극단값 입력: 예외 없이 0/빈칸으로 처리"""

    def setup_method(self):
        self.calculator = MarginCalculator()

    @pytest.mark.parametrize("cost", ["1e30", "1" + "0" * 20, "1_000"])
    def test_unparseable_cost(self, cost):
        """지수 표기/초과 자리수 원가 → 계산 안 함"""
        result = self.calculator.compute(
            MarginInput(cost=cost, active_driver=ActiveDriver.MARGIN, margin_percent="20")
        )
        assert result.cost == 0
        assert result.sale_price == 0
        assert self.calculator.describe(result)["Valor de Venda"] == "R$\xa00,00"

    def test_margin_near_100_overflows_to_zero(self):
        """판매가가 표시 가능한 크기를 넘으면 0"""
        result = self.calculator.compute(
            MarginInput(
                cost="999999999999999",
                active_driver=ActiveDriver.MARGIN,
                margin_percent="99.9999999999999999999999999",
            )
        )
        assert result.sale_price == 0
        assert result.derived_text == ""
        assert self.calculator.describe(result)["Margem sobre a Venda"] == "0.00%"

    def test_tiny_sale_price(self):
        """아주 작은 판매가 → 마진 0, 판매가 대비 마진 0 (예외 없음)"""
        result = self.calculator.compute(
            MarginInput(
                cost=100,
                active_driver=ActiveDriver.SALE_PRICE,
                desired_sale_price="0.0000000000000000000000001",
            )
        )
        assert result.margin_percent == 0
        assert result.margin_on_sale == 0
        assert self.calculator.describe(result) == {
            "Valor de Custo": "R$\xa0100,00",
            "Valor de Venda": "R$\xa00,00",
            "Margem sobre a Venda": "0.00%",
        }

    def test_largest_accepted_cost(self):
        """정수부 15자리 원가는 정상 계산"""
        result = self.calculator.compute(
            MarginInput(cost="999999999999999", active_driver=ActiveDriver.MARGIN, margin_percent="20")
        )
        assert result.sale_price > 0
        assert result.derived_text != ""
