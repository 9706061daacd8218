"""
products_tab.py - 상품 목록 탭 (v1.0)

기능:
1. 컬럼별 필터 + 헤더 클릭 정렬 (▲/▼)
2. 추가/수정 폼 (대화상자)
3. 삭제 확인 대화상자
4. 현재 화면 목록 엑셀 다운로드
"""

from datetime import date
from typing import Optional

import streamlit as st

from precifica.core.error_handler import ErrorHandler
from precifica.core.exceptions import ExportError, RecordNotFoundError, ValidationError
from precifica.domain.catalog import DELETE_CONFIRM_MESSAGE, ProductCatalog
from precifica.domain.models import FieldFilterSet, Product, ProductInput, SortKey, SortSpec
from precifica.generators.excel_generator import ProductExcelGenerator, build_export_rows
from precifica.utils.helpers import format_currency, format_date, format_ipi

# (정렬 키, 헤더, 필터 안내)
COLUMNS = [
    (SortKey.NAME, "NOME / DESCRIÇÃO", "Filtrar por nome..."),
    (SortKey.MANUFACTURER, "FABRICANTE", "Filtrar por fabricante..."),
    (SortKey.COST, "CUSTO RECEBIDO", "Filtrar por custo..."),
    (SortKey.IPI, "IPI (%)", "Filtrar por IPI..."),
    (SortKey.DATE, "DATA", "Filtrar por data..."),
]
COLUMN_RATIO = [4, 3, 2, 1.5, 2, 2]


def render(catalog: ProductCatalog, handler: ErrorHandler):
    """상품 목록 탭 렌더링"""
    if "sort_spec" not in st.session_state:
        st.session_state.sort_spec = None

    header_col, export_col, add_col = st.columns([6, 2, 1])
    with header_col:
        st.header("Produtos")

    filters = _render_filters()
    visible = catalog.view(filters, st.session_state.sort_spec)

    with export_col:
        _render_export_button(catalog, visible, handler)
    with add_col:
        if st.button("➕", key="add_product", help="Adicionar produto"):
            _add_dialog(catalog, handler)

    stats = catalog.stats(visible)
    m1, m2, m3 = st.columns(3)
    m1.metric("Exibindo", f"{stats.visible} de {stats.total}")
    m2.metric("Com IPI", f"{stats.with_ipi}")
    m3.metric("Custo total", format_currency(stats.total_cost, catalog.config))

    _render_sort_header()

    if not visible:
        st.info("Nenhum produto encontrado.")
        return

    for product in visible:
        _render_row(catalog, product, handler)


def _render_filters() -> FieldFilterSet:
    """필터 입력 (빈 값 = 전체)"""
    cols = st.columns(COLUMN_RATIO)
    values = {}
    for col, (key, header, placeholder) in zip(cols, COLUMNS):
        with col:
            values[key.value] = st.text_input(
                header,
                key=f"filter_{key.value}",
                placeholder=placeholder,
                label_visibility="collapsed",
            )
    return FieldFilterSet(**values)


def _on_sort(key: SortKey):
    st.session_state.sort_spec = SortSpec.toggle(st.session_state.sort_spec, key)


def _render_sort_header():
    """정렬 헤더 (같은 컬럼 재클릭 시 방향 전환)"""
    spec: Optional[SortSpec] = st.session_state.sort_spec
    cols = st.columns(COLUMN_RATIO)
    for col, (key, header, _) in zip(cols, COLUMNS):
        indicator = spec.indicator if spec is not None and spec.key == key else ""
        col.button(
            f"{header}{indicator}",
            key=f"sort_{key.value}",
            on_click=_on_sort,
            args=(key,),
            use_container_width=True,
        )
    cols[-1].markdown("**AÇÕES**")


def _render_row(catalog: ProductCatalog, product: Product, handler: ErrorHandler):
    cols = st.columns(COLUMN_RATIO)
    cols[0].write(product.name)
    cols[1].write(product.manufacturer)
    cols[2].write(format_currency(product.cost, catalog.config))
    cols[3].write(format_ipi(product.ipi, catalog.config))
    cols[4].write(format_date(product.date, catalog.config))

    edit_col, delete_col = cols[5].columns(2)
    if edit_col.button("Editar", key=f"edit_{product.id}"):
        _edit_dialog(catalog, handler, product.id)
    if delete_col.button("Excluir", key=f"delete_{product.id}"):
        _delete_dialog(catalog, handler, product.id)


def _render_export_button(catalog: ProductCatalog, visible, handler: ErrorHandler):
    """현재 화면 목록 내보내기"""
    try:
        generator = ProductExcelGenerator(catalog.config)
        data = generator.generate(build_export_rows(visible, catalog.config))
    except ExportError as e:
        handler.handle(e, {"operation": "export"})
        st.error(e.message)
        return

    st.download_button(
        label="📥 Exportar para Excel",
        data=data,
        file_name=generator.file_name,
        mime=generator.mime,
        key="export_excel",
    )


# ============================================================
# 대화상자
# ============================================================

@st.dialog("Adicionar Novo Produto")
def _add_dialog(catalog: ProductCatalog, handler: ErrorHandler):
    _render_form(catalog, handler, None)


@st.dialog("Editar Produto")
def _edit_dialog(catalog: ProductCatalog, handler: ErrorHandler, product_id: int):
    try:
        product = catalog.get(product_id)
    except RecordNotFoundError as e:
        handler.handle(e, {"operation": "edit"})
        st.error(e.message)
        return
    _render_form(catalog, handler, product)


def _render_form(catalog: ProductCatalog, handler: ErrorHandler, product: Optional[Product]):
    """추가/수정 공용 폼"""
    initial = ProductInput.from_product(product) if product else ProductInput(date=date.today())
    prefix = f"form_{product.id if product else 'new'}"

    name = st.text_input("Nome / Descrição", value=initial.name, key=f"{prefix}_name")
    manufacturer = st.text_input("Fabricante", value=initial.manufacturer, key=f"{prefix}_manufacturer")
    cost = st.text_input("Custo Recebido", value=str(initial.cost), key=f"{prefix}_cost")
    picked = st.date_input(
        "Data",
        value=date.fromisoformat(initial.date) if isinstance(initial.date, str) else initial.date,
        key=f"{prefix}_date",
        format="DD/MM/YYYY",
    )
    has_ipi = st.radio(
        "Possui IPI?",
        options=[True, False],
        format_func=lambda v: "Sim" if v else "Não",
        index=0 if initial.has_ipi else 1,
        horizontal=True,
        key=f"{prefix}_has_ipi",
    )
    ipi = ""
    if has_ipi:
        ipi = st.text_input("Valor do IPI (%)", value=str(initial.ipi), key=f"{prefix}_ipi")

    record = ProductInput(
        name=name,
        manufacturer=manufacturer,
        cost=cost,
        date=picked,
        has_ipi=has_ipi,
        ipi=ipi,
    )

    submit_col, cancel_col = st.columns(2)
    submit_label = "Salvar Alterações" if product else "Adicionar"
    if submit_col.button(submit_label, type="primary", key=f"{prefix}_submit"):
        try:
            if product:
                catalog.update(product.id, record)
            else:
                catalog.add(record)
        except ValidationError as e:
            handler.handle(e, {"operation": "update" if product else "add"})
            st.error(e.message)
            return
        except RecordNotFoundError as e:
            handler.handle(e, {"operation": "update"})
            st.error(e.message)
            return
        st.rerun()
    if cancel_col.button("Cancelar", key=f"{prefix}_cancel"):
        st.rerun()


@st.dialog("Excluir produto")
def _delete_dialog(catalog: ProductCatalog, handler: ErrorHandler, product_id: int):
    """삭제 확인: 사용자의 선택이 곧 confirm 콜백의 결과"""
    st.write(DELETE_CONFIRM_MESSAGE)
    yes_col, no_col = st.columns(2)

    answer = None
    if yes_col.button("Excluir", type="primary", key=f"confirm_delete_{product_id}"):
        answer = True
    if no_col.button("Cancelar", key=f"cancel_delete_{product_id}"):
        answer = False
    if answer is None:
        return

    try:
        catalog.remove(product_id, confirm=lambda _message: answer)
    except RecordNotFoundError as e:
        handler.handle(e, {"operation": "remove"})
        st.error(e.message)
        return
    st.rerun()
