"""
validators.py - 상품 폼 검증 유틸리티 (v1.0)

검증과 파싱을 함께 수행한다. 통과한 값은 ParsedProduct로 돌려준다.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from .helpers import to_decimal


# 사용자 알림 문구 (폼 제출 거부)
MSG_FILL_ALL_FIELDS = "Por favor, preencha todos os campos corretamente."
MSG_FILL_IPI = "Por favor, preencha o valor do IPI."


class ValidationSeverity(Enum):
    """검증 심각도"""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """검증 이슈"""
    field: str
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    value: Any = None


@dataclass
class ValidationResult:
    """검증 결과"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)

    def add_error(self, field_name: str, message: str, value: Any = None):
        """에러 추가"""
        self.is_valid = False
        self.errors.append(message)
        self.issues.append(ValidationIssue(field=field_name, message=message, value=value))

    def add_warning(self, field_name: str, message: str):
        """경고 추가"""
        self.warnings.append(message)
        self.issues.append(ValidationIssue(field=field_name, message=message, severity=ValidationSeverity.WARNING))

    def merge(self, other: "ValidationResult"):
        """다른 결과 병합"""
        if not other.is_valid:
            self.is_valid = False
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.issues.extend(other.issues)

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        for issue in self.issues:
            if issue.severity == ValidationSeverity.ERROR:
                return issue
        return None


@dataclass
class ParsedProduct:
    """검증을 통과한 상품 값 (ID 제외)"""
    name: str
    manufacturer: str
    cost: Decimal
    date: date
    ipi: Optional[Decimal]


class DataValidator:
    """데이터 검증기"""

    @staticmethod
    def required(value: Any, field_name: str) -> ValidationResult:
        """필수값 검증"""
        result = ValidationResult()
        if value is None:
            result.add_error(field_name, f"{field_name} é obrigatório.", value)
        elif isinstance(value, str) and not value.strip():
            result.add_error(field_name, f"{field_name} não pode ficar vazio.", value)
        return result

    @staticmethod
    def number(value: Any, field_name: str) -> ValidationResult:
        """숫자 검증"""
        result = ValidationResult()
        if to_decimal(value) is None:
            result.add_error(field_name, f"{field_name} deve ser um número.", value)
        return result

    @staticmethod
    def non_negative(value: Any, field_name: str) -> ValidationResult:
        """0 이상 숫자 검증"""
        result = DataValidator.number(value, field_name)
        if result.is_valid and to_decimal(value) < 0:
            result.add_error(field_name, f"{field_name} não pode ser negativo.", value)
        return result

    @staticmethod
    def iso_date(value: Any, field_name: str) -> ValidationResult:
        """날짜 검증 (date 또는 yyyy-mm-dd)"""
        result = ValidationResult()
        if isinstance(value, date):
            return result
        try:
            date.fromisoformat(str(value).strip())
        except ValueError:
            result.add_error(field_name, f"{field_name} deve estar no formato AAAA-MM-DD.", value)
        return result


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def validate_product_input(record: Any) -> ValidationResult:
    """상품 폼 검증

    Args:
        record: ProductInput (name, manufacturer, cost, date, has_ipi, ipi)

    Returns:
        ValidationResult: 필드별 이슈 포함
    """
    result = ValidationResult()

    result.merge(DataValidator.required(record.name, "name"))
    result.merge(DataValidator.required(record.manufacturer, "manufacturer"))
    result.merge(DataValidator.non_negative(record.cost, "cost"))

    date_check = DataValidator.required(record.date, "date")
    if date_check.is_valid:
        date_check = DataValidator.iso_date(record.date, "date")
    result.merge(date_check)

    if record.has_ipi:
        result.merge(DataValidator.number(record.ipi, "ipi"))

    return result


def user_message(result: ValidationResult) -> str:
    """알림 문구: 기본 필드 오류가 우선, IPI만 틀렸으면 IPI 안내"""
    fields = {issue.field for issue in result.issues if issue.severity == ValidationSeverity.ERROR}
    if fields == {"ipi"}:
        return MSG_FILL_IPI
    return MSG_FILL_ALL_FIELDS


def parse_product_input(record: Any) -> ParsedProduct:
    """검증된 입력을 도메인 값으로 변환 (이름/제조사 대문자)

    validate_product_input 통과 후에만 호출할 것.
    """
    return ParsedProduct(
        name=record.name.strip().upper(),
        manufacturer=record.manufacturer.strip().upper(),
        cost=to_decimal(record.cost),
        date=_parse_date(record.date),
        ipi=to_decimal(record.ipi) if record.has_ipi else None,
    )
