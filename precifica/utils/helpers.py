"""
helpers.py - 숫자 파싱 / 표시 형식 유틸리티 (v1.0)

모든 금액은 Decimal로 다루고, 표시 반올림은 ROUND_HALF_UP으로 통일한다.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Any, Optional

from ..core.config import AppConfig, DEFAULT_CONFIG


ZERO = Decimal("0")
HUNDRED = Decimal("100")

# 입력 허용 형식: [부호]숫자[.,숫자] (ASCII 숫자만, 지수/밑줄 불가)
NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:[.,][0-9]*)?|[.,][0-9]+)")

# 입력값 정수부 최대 자리수
MAX_INTEGER_DIGITS = 15


def to_decimal(value: Any) -> Optional[Decimal]:
    """입력값을 Decimal로 변환. 숫자가 아니면 None

    "20", "20.5", "20,5", 20, 20.5 모두 허용.
    NaN/Infinity, 지수 표기, 정수부 15자리 초과는 None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            return None
    else:
        text = str(value).strip()
        if not NUMBER_PATTERN.fullmatch(text):
            return None
        result = Decimal(text.replace(",", "."))

    if not result.is_finite():
        return None
    if result != 0 and result.adjusted() >= MAX_INTEGER_DIGITS:
        return None
    return result


def is_displayable(value: Decimal, places: int = 2) -> bool:
    """소수점 places 자리로 반올림 가능한 크기인지 (컨텍스트 정밀도 이내)"""
    if not value.is_finite():
        return False
    return value == 0 or value.adjusted() + places < getcontext().prec


def quantize(value: Decimal, places: int = 2) -> Decimal:
    """소수점 자리수 반올림 (ROUND_HALF_UP). 표현 불가한 크기는 0"""
    exponent = Decimal(1).scaleb(-places)
    try:
        return value.quantize(exponent, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ZERO.quantize(exponent)


def safe_divide(numerator: Decimal, denominator: Decimal, default: Decimal = ZERO) -> Decimal:
    """안전한 나눗셈"""
    if denominator == 0:
        return default
    return numerator / denominator


def plain_number(value: Decimal) -> str:
    """불필요한 0을 뺀 숫자 문자열 (0.80 -> "0.8", 100 -> "100")"""
    normalized = value.normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")


def format_fixed(value: Decimal, places: int = 2) -> str:
    """입력 필드용 고정 소수점 문자열 (125 -> "125.00")"""
    return format(quantize(value, places), "f")


def format_currency(value: Decimal, config: AppConfig = None) -> str:
    """통화 포맷 (pt-BR: R$ 1.234,56)"""
    cfg = config or DEFAULT_CONFIG
    amount = quantize(value, cfg.decimal_places)
    sign = "-" if amount < 0 else ""

    grouped = f"{abs(amount):,.{cfg.decimal_places}f}"
    # 영문 구분자를 설정된 구분자로 교체
    grouped = grouped.translate(str.maketrans({
        ",": cfg.thousands_separator,
        ".": cfg.decimal_separator,
    }))
    return f"{sign}{cfg.currency_symbol}{cfg.currency_separator}{grouped}"


def format_percent(value: Decimal, decimals: int = 2) -> str:
    """퍼센트 포맷 (20 -> "20.00%")"""
    return f"{format_fixed(value, decimals)}%"


def format_ipi(ipi: Optional[Decimal], config: AppConfig = None) -> str:
    """IPI 표시: 미적용은 N/A, 0은 0%"""
    cfg = config or DEFAULT_CONFIG
    if ipi is None:
        return cfg.na_token
    return f"{plain_number(ipi)}%"


def format_date(value: date, config: AppConfig = None) -> str:
    """날짜 포맷 (2025-12-01 -> 01/12/2025)"""
    cfg = config or DEFAULT_CONFIG
    return value.strftime(cfg.date_format)
