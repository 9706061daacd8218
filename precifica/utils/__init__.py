"""유틸리티 모듈"""
from .validators import (
    DataValidator,
    ValidationResult,
    ParsedProduct,
    validate_product_input,
    parse_product_input,
    user_message,
)
from .helpers import (
    to_decimal,
    quantize,
    is_displayable,
    plain_number,
    format_fixed,
    format_currency,
    format_percent,
    format_ipi,
    format_date,
    safe_divide,
)

__all__ = [
    "DataValidator",
    "ValidationResult",
    "ParsedProduct",
    "validate_product_input",
    "parse_product_input",
    "user_message",
    "to_decimal",
    "quantize",
    "is_displayable",
    "plain_number",
    "format_fixed",
    "format_currency",
    "format_percent",
    "format_ipi",
    "format_date",
    "safe_divide",
]
