"""
커스텀 예외 클래스

Precifica에서 사용하는 모든 커스텀 예외를 정의
"""

from typing import Optional, Dict, Any


class PrecificaError(Exception):
    """기본 예외 클래스"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        """
        Args:
            message: 에러 메시지 (사용자에게 그대로 노출)
            error_code: 에러 코드
            details: 추가 상세 정보
            cause: 원인 예외
        """
        self.message = message
        self.error_code = error_code or self._default_code()
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def _default_code(self) -> str:
        return "PRC_UNKNOWN"

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ValidationError(PrecificaError):
    """입력 검증 오류 (폼 제출 거부)"""

    def __init__(
        self,
        message: str,
        field: str = None,
        value: Any = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        details = kwargs.pop("details", {})
        details["field"] = field
        details["value"] = str(value)[:100]  # 값 길이 제한
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "PRC_VALIDATION"


class RecordNotFoundError(PrecificaError):
    """존재하지 않는 상품 ID (내부 불변식 위반)"""

    def __init__(
        self,
        message: str,
        record_id: Optional[int] = None,
        operation: str = None,
        **kwargs
    ):
        self.record_id = record_id
        self.operation = operation
        details = kwargs.pop("details", {})
        details["record_id"] = record_id
        details["operation"] = operation
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "PRC_NOT_FOUND"


class ExportError(PrecificaError):
    """스프레드시트 내보내기 오류"""

    def __init__(
        self,
        message: str,
        export_format: str = None,
        file_name: str = None,
        **kwargs
    ):
        self.export_format = export_format
        self.file_name = file_name
        details = kwargs.pop("details", {})
        details["export_format"] = export_format
        details["file_name"] = file_name
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "PRC_EXPORT"


class ConfigurationError(PrecificaError):
    """설정 오류"""

    def __init__(
        self,
        message: str,
        config_key: str = None,
        **kwargs
    ):
        self.config_key = config_key
        details = kwargs.pop("details", {})
        details["config_key"] = config_key
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "PRC_CONFIG"


# 에러 코드 상수
class ErrorCodes:
    """에러 코드 상수"""

    # 일반
    UNKNOWN = "PRC_UNKNOWN"
    VALIDATION = "PRC_VALIDATION"
    CONFIG = "PRC_CONFIG"

    # 상품 목록
    NOT_FOUND = "PRC_NOT_FOUND"
    MISSING_FIELDS = "PRC_MISSING_FIELDS"
    MISSING_IPI = "PRC_MISSING_IPI"

    # 내보내기
    EXPORT = "PRC_EXPORT"
