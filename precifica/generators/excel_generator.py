"""
excel_generator.py - 상품 목록 엑셀 내보내기

기능:
- 현재 화면 목록(필터 + 정렬 적용 후)을 행 딕셔너리로 변환
- 단일 시트 "Produtos" .xlsx 생성 (bytes 반환, 다운로드는 UI 담당)
- 목록이 비어 있어도 헤더 행은 항상 작성
"""

import logging
from io import BytesIO
from typing import Any, Dict, Iterable, List

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from ..core.config import (
    AppConfig,
    DEFAULT_CONFIG,
    COLUMN_COST,
    COLUMN_DATE,
    COLUMN_IPI,
    COLUMN_MANUFACTURER,
    COLUMN_NAME,
)
from ..core.exceptions import ExportError
from ..domain.models import Product
from ..utils.helpers import format_date

logger = logging.getLogger(__name__)

ExportRow = Dict[str, Any]


def build_export_rows(products: Iterable[Product], config: AppConfig = None) -> List[ExportRow]:
    """상품 → 내보내기 행 (컬럼 키 고정)

    원가와 IPI는 숫자 그대로 둔다 (엑셀에서 계산 가능하도록).
    """
    cfg = config or DEFAULT_CONFIG
    return [
        {
            COLUMN_NAME: product.name,
            COLUMN_MANUFACTURER: product.manufacturer,
            COLUMN_COST: product.cost,
            COLUMN_IPI: product.ipi if product.ipi is not None else cfg.na_token,
            COLUMN_DATE: format_date(product.date, cfg),
        }
        for product in products
    ]


class ProductExcelGenerator:
    """상품 목록 엑셀 생성기

    Usage:
        generator = ProductExcelGenerator()
        data = generator.generate(build_export_rows(catalog.view(filters, sort)))
        st.download_button(..., data=data, file_name=generator.file_name)
    """

    # 컬럼 너비
    COLUMN_WIDTHS = {
        COLUMN_NAME: 40,
        COLUMN_MANUFACTURER: 20,
        COLUMN_COST: 16,
        COLUMN_IPI: 10,
        COLUMN_DATE: 12,
    }

    def __init__(self, config: AppConfig = None):
        self.config = config or DEFAULT_CONFIG
        self.config.validate()

        self.HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        self.HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)

    @property
    def file_name(self) -> str:
        return self.config.export_file_name

    @property
    def mime(self) -> str:
        return self.config.export_mime

    def generate(self, rows: List[ExportRow]) -> bytes:
        """엑셀 파일 생성

        Args:
            rows: build_export_rows 결과

        Returns:
            .xlsx 파일 내용

        Raises:
            ExportError: 직렬화 실패
        """
        try:
            wb = Workbook()
            ws = wb.active
            ws.title = self.config.export_sheet_name

            self._write_header(ws)
            for idx, row in enumerate(rows, start=2):
                self._write_row(ws, idx, row)
            self._adjust_column_widths(ws)

            buffer = BytesIO()
            wb.save(buffer)
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(
                f"Falha ao gerar a planilha: {e}",
                export_format="xlsx",
                file_name=self.file_name,
                cause=e,
            ) from e

        logger.info(f"Exported {len(rows)} product(s) to {self.file_name}")
        return buffer.getvalue()

    def _write_header(self, ws):
        """헤더 행 작성"""
        for col, header in enumerate(self.config.export_columns, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = self.HEADER_FONT
            cell.fill = self.HEADER_FILL
            cell.alignment = Alignment(horizontal="center", vertical="center")

        # 헤더 행 고정
        ws.freeze_panes = "A2"

    def _write_row(self, ws, row: int, data: ExportRow):
        """상품 행 작성"""
        for col, header in enumerate(self.config.export_columns, start=1):
            if header not in data:
                raise ExportError(
                    f"Coluna ausente na linha {row - 1}: {header}",
                    export_format="xlsx",
                    file_name=self.file_name,
                )
            cell = ws.cell(row=row, column=col, value=data[header])
            if header == COLUMN_COST:
                cell.number_format = self.config.currency_number_format

    def _adjust_column_widths(self, ws):
        """열 너비 조정"""
        for col, header in enumerate(self.config.export_columns, start=1):
            letter = ws.cell(row=1, column=col).column_letter
            ws.column_dimensions[letter].width = self.COLUMN_WIDTHS.get(header, 15)
