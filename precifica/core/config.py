"""
config.py - 애플리케이션 설정 (v1.0)

표시 형식, 내보내기 파일 등 모든 설정값을 중앙 관리
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from .exceptions import ConfigurationError


# 내보내기 컬럼 (순서 고정)
COLUMN_NAME = "NOME / DESCRIÇÃO"
COLUMN_MANUFACTURER = "FABRICANTE"
COLUMN_COST = "CUSTO RECEBIDO"
COLUMN_IPI = "IPI (%)"
COLUMN_DATE = "DATA"

EXPORT_COLUMNS: Tuple[str, ...] = (
    COLUMN_NAME,
    COLUMN_MANUFACTURER,
    COLUMN_COST,
    COLUMN_IPI,
    COLUMN_DATE,
)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass
class AppConfig:
    """애플리케이션 전체 설정 (v1.0)

    화면 표시는 pt-BR 기준 (R$, dd/mm/yyyy).
    """
    # 통화 표시
    currency_symbol: str = "R$"
    currency_separator: str = "\u00a0"     # 기호와 금액 사이 (브라우저 pt-BR 출력과 동일)
    thousands_separator: str = "."
    decimal_separator: str = ","
    decimal_places: int = 2

    # 표시 토큰
    na_token: str = "N/A"                   # IPI 미적용
    date_format: str = "%d/%m/%Y"

    # 내보내기
    export_file_name: str = "produtos.xlsx"
    export_sheet_name: str = "Produtos"
    export_mime: str = XLSX_MIME
    export_columns: Tuple[str, ...] = EXPORT_COLUMNS
    currency_number_format: str = '"R$" #,##0.00'

    # 로깅
    log_level: int = logging.INFO

    def validate(self) -> None:
        """설정 유효성 검사

        Raises:
            ConfigurationError: 내보내기에 쓸 수 없는 값이 있을 때
        """
        if self.decimal_places < 0:
            raise ConfigurationError(
                "decimal_places는 0 이상이어야 합니다.", config_key="decimal_places"
            )
        if not self.export_sheet_name:
            raise ConfigurationError(
                "시트 이름이 비어 있습니다.", config_key="export_sheet_name"
            )
        if tuple(self.export_columns) != EXPORT_COLUMNS:
            raise ConfigurationError(
                "내보내기 컬럼은 변경할 수 없습니다.", config_key="export_columns"
            )
        if not self.export_file_name.endswith(".xlsx"):
            raise ConfigurationError(
                "내보내기 파일은 .xlsx 여야 합니다.", config_key="export_file_name"
            )


# 기본 설정 인스턴스
DEFAULT_CONFIG = AppConfig()
