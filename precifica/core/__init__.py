"""코어 모듈 (v1.0)"""
from .exceptions import (
    PrecificaError,
    ValidationError,
    RecordNotFoundError,
    ExportError,
    ConfigurationError,
    ErrorCodes,
)
from .error_handler import ErrorHandler, RecoveryAction
from .config import AppConfig, DEFAULT_CONFIG, EXPORT_COLUMNS
from .logging import setup_logger

__all__ = [
    # 예외
    "PrecificaError",
    "ValidationError",
    "RecordNotFoundError",
    "ExportError",
    "ConfigurationError",
    "ErrorCodes",
    "ErrorHandler",
    "RecoveryAction",
    # 설정
    "AppConfig",
    "DEFAULT_CONFIG",
    "EXPORT_COLUMNS",
    "setup_logger",
]
