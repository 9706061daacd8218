"""
models.py - 도메인 모델 (v1.0)

순수 파이썬 데이터 클래스. 외부 의존성 없음.
UI 프레임워크가 바뀌어도 이 파일은 그대로 사용 가능.
"""

from dataclasses import dataclass, field
import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class ActiveDriver(Enum):
    """계산기에서 기준이 되는 입력 필드"""
    MARGIN = "margin"               # 마진(%) 입력 → 판매가 산출
    SALE_PRICE = "sale_price"       # 판매가 입력 → 마진(%) 산출


class FreightType(Enum):
    """운임 조건 (표시 전용, 계산에 영향 없음)"""
    CIF = "CIF"
    FOB = "FOB"

    @property
    def label(self) -> str:
        return {
            FreightType.CIF: "CIF (Custo, Seguro e Frete)",
            FreightType.FOB: "FOB (Livre a Bordo)",
        }[self]

    @property
    def explanation(self) -> str:
        return {
            FreightType.CIF: (
                "CIF: O vendedor é responsável pelos custos e riscos do "
                "transporte até o porto de destino."
            ),
            FreightType.FOB: (
                "FOB: O comprador é responsável pelos custos e riscos do "
                "transporte a partir do porto de embarque."
            ),
        }[self]


class SortKey(Enum):
    """정렬 가능한 컬럼"""
    NAME = "name"
    MANUFACTURER = "manufacturer"
    COST = "cost"
    IPI = "ipi"
    DATE = "date"


class SortOrder(Enum):
    """정렬 방향"""
    ASC = "asc"
    DESC = "desc"


# 폼/필드에서 들어오는 원시값
RawNumber = Union[str, int, float, Decimal, None]


@dataclass(frozen=True)
class MarginInput:
    """계산기 입력

    active_driver가 가리키는 값만 신뢰하고, 나머지 값은 항상 다시 계산한다.
    """
    cost: RawNumber
    active_driver: ActiveDriver = ActiveDriver.MARGIN
    margin_percent: RawNumber = None
    desired_sale_price: RawNumber = None


@dataclass(frozen=True)
class MarginResult:
    """계산 결과"""
    cost: Decimal                   # 유효 원가 (무효면 0)
    sale_price: Decimal             # 유효 판매가
    margin_percent: Decimal         # 마진 필드 값 (입력값 또는 산출값)
    margin_on_sale: Decimal         # 판매가 대비 마진 (항상 재계산)
    derived_text: str = ""          # 비기준 필드에 쓸 문자열 ("" = 비움)


@dataclass(frozen=True)
class Product:
    """상품 정보 (수정은 전체 교체로만)"""
    id: int
    name: str                       # 대문자 저장
    manufacturer: str               # 대문자 저장
    cost: Decimal
    date: datetime.date
    ipi: Optional[Decimal] = None   # None = 미적용 (0과 구분)

    @property
    def has_ipi(self) -> bool:
        return self.ipi is not None


@dataclass
class ProductInput:
    """상품 폼 입력값 (검증 전)"""
    name: str = ""
    manufacturer: str = ""
    cost: RawNumber = ""
    date: Union[str, datetime.date, None] = ""
    has_ipi: bool = False
    ipi: RawNumber = ""

    @classmethod
    def from_product(cls, product: Product) -> "ProductInput":
        """수정 폼 초기값"""
        return cls(
            name=product.name,
            manufacturer=product.manufacturer,
            cost=format(product.cost, "f"),
            date=product.date.isoformat(),
            has_ipi=product.has_ipi,
            ipi=format(product.ipi, "f") if product.has_ipi else "",
        )


@dataclass(frozen=True)
class SortSpec:
    """정렬 설정 (단일 키)"""
    key: SortKey
    order: SortOrder = SortOrder.ASC

    @classmethod
    def toggle(cls, current: Optional["SortSpec"], key: SortKey) -> "SortSpec":
        """헤더 클릭: 같은 키 오름차순이면 내림차순, 그 외는 새 키 오름차순"""
        if current is not None and current.key == key and current.order == SortOrder.ASC:
            return cls(key, SortOrder.DESC)
        return cls(key, SortOrder.ASC)

    @property
    def indicator(self) -> str:
        return " ▲" if self.order == SortOrder.ASC else " ▼"


@dataclass
class FieldFilterSet:
    """컬럼별 필터 (빈 문자열 = 전체 통과)"""
    name: str = ""
    manufacturer: str = ""
    cost: str = ""
    ipi: str = ""
    date: str = ""

    def is_empty(self) -> bool:
        return not any((self.name, self.manufacturer, self.cost, self.ipi, self.date))


@dataclass
class CatalogStats:
    """목록 요약"""
    total: int = 0
    visible: int = 0
    with_ipi: int = 0
    total_cost: Decimal = field(default_factory=Decimal)
