"""
calculator_tab.py - 마진 계산기 탭 (v1.0)

원가 + (마진% 또는 희망 판매가) → 판매가 / 판매가 대비 마진
기준 필드는 라디오로 명시적으로 선택하고, 반대 필드는 읽기 전용으로 자동 계산.
"""

import streamlit as st

from precifica.domain.models import ActiveDriver, FreightType
from precifica.domain.logic import MarginCalculator, CalculatorState

DRIVER_LABELS = {
    ActiveDriver.MARGIN: "Margem Desejada (%)",
    ActiveDriver.SALE_PRICE: "Valor de Venda Desejado (R$)",
}


def _get_state() -> CalculatorState:
    if "calculator_state" not in st.session_state:
        state = CalculatorState()
        st.session_state.calculator_state = state
        # 위젯 초기값
        st.session_state.calc_cost = state.cost_text
        st.session_state.calc_margin = state.margin_text
        st.session_state.calc_sale = state.sale_price_text
        st.session_state.calc_driver = state.active_driver
        st.session_state.calc_freight = state.freight
    return st.session_state.calculator_state


def _sync_fields(calculator: MarginCalculator):
    """reconcile 후 위젯 값 갱신 (콜백 안에서만 호출)"""
    state = _get_state()
    state.reconcile(calculator)
    st.session_state.calc_margin = state.margin_text
    st.session_state.calc_sale = state.sale_price_text


def _on_cost_change(calculator: MarginCalculator):
    _get_state().edit_cost(st.session_state.calc_cost)
    _sync_fields(calculator)


def _on_margin_change(calculator: MarginCalculator):
    _get_state().edit_margin(st.session_state.calc_margin)
    _sync_fields(calculator)


def _on_sale_change(calculator: MarginCalculator):
    _get_state().edit_sale_price(st.session_state.calc_sale)
    _sync_fields(calculator)


def _on_driver_change(calculator: MarginCalculator):
    _get_state().activate(st.session_state.calc_driver)
    _sync_fields(calculator)


def _on_freight_change():
    _get_state().select_freight(st.session_state.calc_freight)


def render(calculator: MarginCalculator):
    """계산기 탭 렌더링"""
    st.header("Calculadora de Margens")

    state = _get_state()

    st.text_input(
        "Custo do Material (R$)",
        key="calc_cost",
        placeholder="Ex: 100,00",
        on_change=_on_cost_change,
        args=(calculator,),
    )

    st.radio(
        "Calcular a partir de",
        options=list(ActiveDriver),
        format_func=lambda d: DRIVER_LABELS[d],
        key="calc_driver",
        horizontal=True,
        on_change=_on_driver_change,
        args=(calculator,),
    )

    col1, col2 = st.columns(2)
    with col1:
        st.text_input(
            DRIVER_LABELS[ActiveDriver.MARGIN],
            key="calc_margin",
            placeholder="Ex: 20",
            disabled=state.is_locked(ActiveDriver.MARGIN),
            on_change=_on_margin_change,
            args=(calculator,),
        )
    with col2:
        st.text_input(
            DRIVER_LABELS[ActiveDriver.SALE_PRICE],
            key="calc_sale",
            placeholder="Ex: 125,00",
            disabled=state.is_locked(ActiveDriver.SALE_PRICE),
            on_change=_on_sale_change,
            args=(calculator,),
        )

    # ========== 운임 조건 (표시 전용) ==========
    freight = st.radio(
        "Tipo de Frete",
        options=list(FreightType),
        format_func=lambda f: f.label,
        key="calc_freight",
        on_change=_on_freight_change,
    )
    st.caption(freight.explanation)

    st.divider()

    # ========== 결과 ==========
    st.subheader("Resultados")
    result = calculator.compute(state.to_input())
    columns = st.columns(3)
    for column, (label, value) in zip(columns, calculator.describe(result).items()):
        column.metric(label, value)
