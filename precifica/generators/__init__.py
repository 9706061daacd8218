"""내보내기 모듈"""
from .excel_generator import ProductExcelGenerator, build_export_rows

__all__ = [
    "ProductExcelGenerator",
    "build_export_rows",
]
