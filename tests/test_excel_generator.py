"""
test_excel_generator.py - 엑셀 내보내기 테스트

생성된 bytes를 openpyxl로 다시 읽어 내용 확인
"""

import sys
from datetime import date
from decimal import Decimal
from io import BytesIO
from pathlib import Path

import pytest
from openpyxl import load_workbook

# 경로 설정
sys.path.insert(0, str(Path(__file__).parent.parent))

from precifica.core.config import AppConfig, EXPORT_COLUMNS, XLSX_MIME
from precifica.core.exceptions import ConfigurationError, ExportError
from precifica.domain.catalog import ProductCatalog
from precifica.domain.models import FieldFilterSet, SortKey, SortOrder, SortSpec
from precifica.generators.excel_generator import ProductExcelGenerator, build_export_rows


def _load(data: bytes):
    wb = load_workbook(BytesIO(data))
    return wb, wb.active


class TestBuildExportRows:
    """내보내기 행 변환"""

    def test_seed_rows(self):
        rows = build_export_rows(ProductCatalog.with_seed())
        assert rows[0] == {
            "NOME / DESCRIÇÃO": "SERINGA DESCARTÁVEL 5ML",
            "FABRICANTE": "DESCARPACK",
            "CUSTO RECEBIDO": Decimal("0.8"),
            "IPI (%)": Decimal("5"),
            "DATA": "01/12/2025",
        }
        assert rows[1]["IPI (%)"] == "N/A"

    def test_empty(self):
        assert build_export_rows([]) == []


class TestProductExcelGenerator:
    """엑셀 파일 생성"""

    def setup_method(self):
        self.generator = ProductExcelGenerator()
        self.catalog = ProductCatalog.with_seed()

    def test_file_metadata(self):
        assert self.generator.file_name == "produtos.xlsx"
        assert self.generator.mime == XLSX_MIME

    def test_header_and_sheet(self):
        data = self.generator.generate(build_export_rows(self.catalog))
        wb, ws = _load(data)
        assert wb.sheetnames == ["Produtos"]
        assert tuple(c.value for c in ws[1]) == EXPORT_COLUMNS
        assert ws.freeze_panes == "A2"

    def test_rows_written(self):
        data = self.generator.generate(build_export_rows(self.catalog))
        _, ws = _load(data)
        assert ws.max_row == 3
        assert ws.cell(row=2, column=1).value == "SERINGA DESCARTÁVEL 5ML"
        assert ws.cell(row=2, column=3).value == pytest.approx(0.8)
        assert ws.cell(row=2, column=4).value == 5
        assert ws.cell(row=2, column=5).value == "01/12/2025"
        assert ws.cell(row=3, column=4).value == "N/A"

    def test_cost_number_format(self):
        data = self.generator.generate(build_export_rows(self.catalog))
        _, ws = _load(data)
        assert ws.cell(row=2, column=3).number_format == '"R$" #,##0.00'

    def test_empty_list_writes_header_only(self):
        """빈 목록 → 헤더만 있는 파일"""
        data = self.generator.generate([])
        _, ws = _load(data)
        assert ws.max_row == 1
        assert tuple(c.value for c in ws[1]) == EXPORT_COLUMNS

    def test_exports_visible_order(self):
        """화면 목록 순서 그대로 내보냄"""
        visible = self.catalog.view(FieldFilterSet(), SortSpec(SortKey.COST, SortOrder.ASC))
        data = self.generator.generate(build_export_rows(visible))
        _, ws = _load(data)
        assert ws.cell(row=2, column=1).value == "LUVA DE PROCEDIMENTO (M)"
        assert ws.cell(row=3, column=1).value == "SERINGA DESCARTÁVEL 5ML"

    def test_exports_filtered_only(self):
        visible = self.catalog.view(FieldFilterSet(manufacturer="talge"))
        data = self.generator.generate(build_export_rows(visible))
        _, ws = _load(data)
        assert ws.max_row == 2
        assert ws.cell(row=2, column=2).value == "TALGE"

    def test_missing_column_raises(self):
        """컬럼 누락 행 → ExportError"""
        rows = build_export_rows(self.catalog)
        del rows[0]["DATA"]
        with pytest.raises(ExportError) as exc_info:
            self.generator.generate(rows)
        assert exc_info.value.error_code == "PRC_EXPORT"
        assert exc_info.value.file_name == "produtos.xlsx"

    def test_unserializable_value_wrapped(self):
        """openpyxl이 거부하는 값 → ExportError로 감쌈"""
        rows = [{column: object() for column in EXPORT_COLUMNS}]
        with pytest.raises(ExportError) as exc_info:
            self.generator.generate(rows)
        assert exc_info.value.cause is not None

    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigurationError):
            ProductExcelGenerator(AppConfig(export_file_name="produtos.csv"))

    def test_custom_date_format(self):
        config = AppConfig(date_format="%Y-%m-%d")
        rows = build_export_rows(ProductCatalog.with_seed(config), config)
        assert rows[0]["DATA"] == date(2025, 12, 1).isoformat()
