"""
catalog.py - 상품 목록 상태 컨테이너 (v1.0)

상품 목록의 유일한 소유자. 추가/수정/삭제는 이 클래스를 통해서만 일어나며,
화면에 보이는 목록(view)은 매번 원본에서 필터 → 정렬로 다시 만든다.

정렬 규칙:
- IPI 미적용(None)은 모든 숫자보다 작다 (오름차순 맨 앞, 내림차순 맨 뒤)
- 오름차순은 안정 정렬 (같은 값은 입력 순서 유지)
- 내림차순은 오름차순 결과를 그대로 뒤집은 것
"""

import itertools
import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .models import (
    CatalogStats,
    FieldFilterSet,
    Product,
    ProductInput,
    SortKey,
    SortOrder,
    SortSpec,
)
from ..core.config import AppConfig, DEFAULT_CONFIG
from ..core.exceptions import ErrorCodes, RecordNotFoundError, ValidationError
from ..utils.helpers import ZERO, format_date, plain_number
from ..utils.validators import (
    MSG_FILL_IPI,
    ParsedProduct,
    parse_product_input,
    user_message,
    validate_product_input,
)

logger = logging.getLogger(__name__)

DELETE_CONFIRM_MESSAGE = "Tem certeza que deseja excluir este produto?"

# 삭제 확인 콜백: 메시지를 받아 True(확인) / False(취소)
ConfirmFn = Callable[[str], bool]


def seed_products() -> List[Product]:
    """시작 시 기본 상품 2건"""
    return [
        Product(
            id=1,
            name="SERINGA DESCARTÁVEL 5ML",
            manufacturer="DESCARPACK",
            cost=Decimal("0.8"),
            date=date(2025, 12, 1),
            ipi=Decimal("5"),
        ),
        Product(
            id=2,
            name="LUVA DE PROCEDIMENTO (M)",
            manufacturer="TALGE",
            cost=Decimal("0.25"),
            date=date(2025, 12, 2),
            ipi=None,
        ),
    ]


def _contains(haystack: str, needle: str) -> bool:
    return needle.casefold() in haystack.casefold()


def matches(product: Product, filters: FieldFilterSet, config: AppConfig = None) -> bool:
    """컬럼별 부분 문자열 필터 (대소문자 무시, 모든 조건 AND)

    원가/IPI는 통화 문자열이 아니라 숫자 문자열로 비교한다.
    """
    cfg = config or DEFAULT_CONFIG
    ipi_text = cfg.na_token if product.ipi is None else plain_number(product.ipi)

    return (
        _contains(product.name, filters.name)
        and _contains(product.manufacturer, filters.manufacturer)
        and _contains(plain_number(product.cost), filters.cost)
        and _contains(ipi_text, filters.ipi)
        and (
            _contains(product.date.isoformat(), filters.date)
            or _contains(format_date(product.date, cfg), filters.date)
        )
    )


def sort_key(product: Product, key: SortKey) -> Tuple:
    """정렬 키 (모든 컬럼에 대해 전순서)"""
    if key == SortKey.NAME:
        return (product.name,)
    if key == SortKey.MANUFACTURER:
        return (product.manufacturer,)
    if key == SortKey.COST:
        return (product.cost,)
    if key == SortKey.IPI:
        # 미적용 < 모든 숫자
        if product.ipi is None:
            return (0, ZERO)
        return (1, product.ipi)
    return (product.date,)


def sort_products(products: Iterable[Product], spec: Optional[SortSpec]) -> List[Product]:
    """정렬 (spec이 없으면 입력 순서 유지)"""
    ordered = list(products)
    if spec is None:
        return ordered
    ordered.sort(key=lambda p: sort_key(p, spec.key))
    if spec.order == SortOrder.DESC:
        ordered.reverse()
    return ordered


class ProductCatalog:
    """상품 목록

    Usage:
        catalog = ProductCatalog.with_seed()
        product = catalog.add(ProductInput(name="...", ...))
        rows = catalog.view(FieldFilterSet(name="luva"), SortSpec(SortKey.COST))
    """

    def __init__(self, products: Iterable[Product] = None, config: Optional[AppConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._products: List[Product] = list(products or [])

        ids = [p.id for p in self._products]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate product ids in initial catalog")

        # 삭제된 ID도 재사용하지 않는다
        self._id_sequence = itertools.count(max(ids, default=0) + 1)
        self._version = 0

    @classmethod
    def with_seed(cls, config: Optional[AppConfig] = None) -> "ProductCatalog":
        return cls(seed_products(), config=config)

    # ------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(tuple(self._products))

    def __contains__(self, product_id: int) -> bool:
        return any(p.id == product_id for p in self._products)

    @property
    def version(self) -> int:
        """변경 횟수 (메모이제이션 키로 사용 가능)"""
        return self._version

    def get(self, product_id: int) -> Product:
        return self._products[self._index_of(product_id, "get")]

    def view(
        self,
        filters: Optional[FieldFilterSet] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[Product]:
        """현재 화면 목록: 필터 후 정렬

        필터와 정렬은 교환 가능하지만, 줄어든 목록을 정렬하는 편이 싸다.
        원본 목록은 변경하지 않는다.
        """
        if filters is None or filters.is_empty():
            visible = list(self._products)
        else:
            visible = [p for p in self._products if matches(p, filters, self.config)]
        return sort_products(visible, sort)

    def stats(self, visible: Optional[List[Product]] = None) -> CatalogStats:
        """목록 요약 (visible이 없으면 전체 기준)"""
        visible = self._products if visible is None else visible
        return CatalogStats(
            total=len(self._products),
            visible=len(visible),
            with_ipi=sum(1 for p in visible if p.has_ipi),
            total_cost=sum((p.cost for p in visible), ZERO),
        )

    # ------------------------------------------------------------
    # 변경
    # ------------------------------------------------------------

    def add(self, record: ProductInput) -> Product:
        """상품 추가

        Raises:
            ValidationError: 필수값 누락, 원가/IPI 숫자 아님, 날짜 없음
        """
        parsed = self._validate(record, "add")
        product = Product(id=next(self._id_sequence), **vars(parsed))
        self._products.append(product)
        self._version += 1
        logger.info(f"Product added: #{product.id} {product.name}")
        return product

    def update(self, product_id: int, record: ProductInput) -> Product:
        """상품 전체 교체 (ID 유지)

        Raises:
            RecordNotFoundError: 해당 ID 없음 (내부 불변식 위반)
            ValidationError: add와 동일
        """
        index = self._index_of(product_id, "update")
        parsed = self._validate(record, "update")
        product = Product(id=product_id, **vars(parsed))
        self._products[index] = product
        self._version += 1
        logger.info(f"Product updated: #{product.id} {product.name}")
        return product

    def remove(self, product_id: int, confirm: ConfirmFn) -> bool:
        """확인 후 삭제

        Args:
            product_id: 삭제할 상품 ID
            confirm: 확인 대화상자. True를 돌려줄 때만 삭제

        Returns:
            bool: 삭제 여부 (취소 시 False, 상태 변경 없음)
        """
        index = self._index_of(product_id, "remove")
        if confirm(DELETE_CONFIRM_MESSAGE) is not True:
            logger.info(f"Deletion of #{product_id} cancelled by user")
            return False

        removed = self._products.pop(index)
        self._version += 1
        logger.info(f"Product removed: #{removed.id} {removed.name}")
        return True

    # ------------------------------------------------------------
    # 내부
    # ------------------------------------------------------------

    def _index_of(self, product_id: int, operation: str) -> int:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise RecordNotFoundError(
            f"Produto #{product_id} não encontrado.",
            record_id=product_id,
            operation=operation,
        )

    def _validate(self, record: ProductInput, operation: str) -> ParsedProduct:
        result = validate_product_input(record)
        if not result.is_valid:
            issue = result.first_error
            message = user_message(result)
            raise ValidationError(
                message,
                field=issue.field,
                value=issue.value,
                details={
                    "operation": operation,
                    "issues": [i.field for i in result.issues],
                },
                error_code=(
                    ErrorCodes.MISSING_IPI if message == MSG_FILL_IPI else ErrorCodes.MISSING_FIELDS
                ),
            )
        return parse_product_input(record)
