"""
app.py - Streamlit 대시보드 (v1.0)

DDD 원칙: UI는 껍데기일 뿐, 로직은 domain에서 가져옴

실행:
    streamlit run precifica/ui/app.py

탭:
- Calculadora: 마진 / 판매가 계산기
- Produtos: 상품 목록 (필터, 정렬, 추가/수정/삭제, 엑셀 내보내기)
"""

import sys
from pathlib import Path

import streamlit as st

# 프로젝트 루트를 Python 경로에 추가
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from precifica.core.config import DEFAULT_CONFIG
from precifica.core.error_handler import ErrorHandler
from precifica.core.logging import setup_logger
from precifica.domain.catalog import ProductCatalog
from precifica.domain.logic import MarginCalculator
from precifica.ui.tabs import calculator_tab, products_tab

# ============================================================
# 페이지 설정
# ============================================================
st.set_page_config(
    page_title="Precifica",
    page_icon="🧮",
    layout="wide"
)

logger = setup_logger("precifica", DEFAULT_CONFIG.log_level)

# ============================================================
# 세션 상태 (사용자별 상품 목록, 에러 기록)
# ============================================================
if "catalog" not in st.session_state:
    st.session_state.catalog = ProductCatalog.with_seed(DEFAULT_CONFIG)
    logger.info(f"Session started with {len(st.session_state.catalog)} seed products")

if "error_handler" not in st.session_state:
    st.session_state.error_handler = ErrorHandler(logger)

calculator = MarginCalculator(DEFAULT_CONFIG)

# ============================================================
# 탭 구성
# ============================================================
tab_calc, tab_products = st.tabs(["Calculadora", "Produtos"])

with tab_calc:
    calculator_tab.render(calculator)

with tab_products:
    products_tab.render(st.session_state.catalog, st.session_state.error_handler)
