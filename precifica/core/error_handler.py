"""
에러 핸들러

중앙 집중식 에러 처리: 기록, 로깅, 복구 액션 결정
"""

import logging
import traceback
from typing import Optional, Any, Dict, List
from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime

from .exceptions import (
    PrecificaError,
    ValidationError,
    RecordNotFoundError,
    ExportError,
)


class RecoveryAction(Enum):
    """복구 액션"""
    SKIP = "skip"                           # 작업 취소, 상태 변경 없음
    ABORT = "abort"                         # 불변식 위반
    LOG_AND_CONTINUE = "log_and_continue"


@dataclass
class ErrorRecord:
    """에러 기록"""
    error_code: str
    message: str
    timestamp: str
    traceback: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    recovery_action: Optional[RecoveryAction] = None


class ErrorHandler:
    """에러 핸들러

    재시도는 하지 않는다. 모든 작업은 UI 이벤트 하나 안에서 끝난다.
    """

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self.error_history: List[ErrorRecord] = []

        # 에러별 복구 전략 매핑
        self._recovery_strategies = {
            ValidationError: self._handle_validation_error,
            RecordNotFoundError: self._handle_not_found,
            ExportError: self._handle_export_error,
        }

    def handle(
        self,
        error: Exception,
        context: Dict[str, Any] = None
    ) -> RecoveryAction:
        """
        에러 처리

        Args:
            error: 발생한 예외
            context: 에러 컨텍스트 (operation 등)

        Returns:
            복구 액션
        """
        context = context or {}

        record = self._create_record(error, context)
        self.error_history.append(record)

        self._log_error(error, context)

        recovery = self._determine_recovery(error, context)
        record.recovery_action = recovery

        return recovery

    def _create_record(
        self,
        error: Exception,
        context: Dict[str, Any]
    ) -> ErrorRecord:
        """에러 기록 생성"""
        error_code = "UNKNOWN"
        details = {}

        if isinstance(error, PrecificaError):
            error_code = error.error_code
            details = error.details

        return ErrorRecord(
            error_code=error_code,
            message=str(error),
            timestamp=datetime.now().isoformat(),
            traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
            details={**details, **context}
        )

    def _log_error(self, error: Exception, context: Dict[str, Any]):
        """에러 로깅"""
        if isinstance(error, ValidationError):
            # 사용자 입력 문제: 스택 트레이스 불필요
            self.logger.warning(
                f"[{error.error_code}] {error.message}",
                extra={"context": {**error.details, **context}},
            )
        elif isinstance(error, PrecificaError):
            self.logger.error(
                f"[{error.error_code}] {error.message}",
                extra={"context": {**error.details, **context}},
                exc_info=error
            )
        else:
            self.logger.error(
                f"Unhandled error: {str(error)}",
                extra={"context": context},
                exc_info=error
            )

    def _determine_recovery(
        self,
        error: Exception,
        context: Dict[str, Any]
    ) -> RecoveryAction:
        """복구 전략 결정"""
        for error_type, handler in self._recovery_strategies.items():
            if isinstance(error, error_type):
                return handler(error, context)

        if isinstance(error, PrecificaError):
            return RecoveryAction.LOG_AND_CONTINUE
        return RecoveryAction.ABORT

    def _handle_validation_error(
        self,
        error: ValidationError,
        context: Dict[str, Any]
    ) -> RecoveryAction:
        """검증 에러: 폼 제출만 취소"""
        return RecoveryAction.SKIP

    def _handle_not_found(
        self,
        error: RecordNotFoundError,
        context: Dict[str, Any]
    ) -> RecoveryAction:
        """ID 조회 실패: 프로그래밍 결함"""
        self.logger.critical(
            f"Invariant violated: product {error.record_id} missing during {error.operation}"
        )
        return RecoveryAction.ABORT

    def _handle_export_error(
        self,
        error: ExportError,
        context: Dict[str, Any]
    ) -> RecoveryAction:
        """내보내기 실패: 사용자에게 알리고 계속"""
        return RecoveryAction.LOG_AND_CONTINUE

    def get_error_summary(self) -> Dict[str, Any]:
        """에러 요약 반환"""
        if not self.error_history:
            return {"total_errors": 0, "by_code": {}}

        by_code = {}
        for record in self.error_history:
            code = record.error_code
            by_code[code] = by_code.get(code, 0) + 1

        return {
            "total_errors": len(self.error_history),
            "by_code": by_code,
            "recent_errors": [
                {"code": r.error_code, "message": r.message, "time": r.timestamp}
                for r in self.error_history[-5:]
            ]
        }

    def clear_history(self):
        """에러 히스토리 초기화"""
        self.error_history.clear()
