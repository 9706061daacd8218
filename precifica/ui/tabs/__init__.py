"""Streamlit 탭 모듈 (v1.0)"""
from . import calculator_tab
from . import products_tab

__all__ = [
    "calculator_tab",
    "products_tab",
]
