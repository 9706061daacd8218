"""도메인 모듈 (v1.0) - 순수 비즈니스 로직"""
from .models import (
    ActiveDriver,
    FreightType,
    MarginInput,
    MarginResult,
    Product,
    ProductInput,
    SortKey,
    SortOrder,
    SortSpec,
    FieldFilterSet,
    CatalogStats,
)
from .logic import MarginCalculator, CalculatorState
from .catalog import ProductCatalog, seed_products, DELETE_CONFIRM_MESSAGE

__all__ = [
    # 계산기
    "ActiveDriver",
    "FreightType",
    "MarginInput",
    "MarginResult",
    "MarginCalculator",
    "CalculatorState",
    # 상품 목록
    "Product",
    "ProductInput",
    "SortKey",
    "SortOrder",
    "SortSpec",
    "FieldFilterSet",
    "CatalogStats",
    "ProductCatalog",
    "seed_products",
    "DELETE_CONFIRM_MESSAGE",
]
