"""
Precifica - 마진 계산기 + 상품 목록 (v1.0)

- domain: 계산기 / 상품 목록 (순수 파이썬)
- generators: 엑셀 내보내기
- ui: Streamlit 화면 (streamlit run precifica/ui/app.py)
"""

__version__ = "1.0.0"
