"""
Dubber 번역 예외 모듈

실패 유형:
- NetworkError: 연결/DNS/전송 오류, 5xx, 429 (재시도 대상)
- TranslationTimeoutError: 시도당 타임아웃 초과 (재시도 대상)
- BadResponseError: 잘못되었거나 비어 있는 원격 응답 (즉시 오프라인 대체)
- CancellationRequested: 호출자가 요청한 취소 (항상 즉시 전파)
- CacheIOError: 캐시 파일 읽기/쓰기 실패 (캐시 내부에서만 처리)
- OfflineUnavailableError: 오프라인 모드 비활성 상태에서 원격 번역 실패
"""

from enum import Enum
from typing import Optional


class TranslationError(Exception):
    """번역 관련 예외의 기본 클래스"""
    pass


class NetworkError(TranslationError):
    """원격 번역 서버와 통신할 수 없을 때 발생하는 예외"""
    pass


class TranslationTimeoutError(NetworkError):
    """시도당 타임아웃을 초과했을 때 발생하는 예외"""
    pass


class BadResponseError(TranslationError):
    """원격 응답이 잘못되었거나 번역문이 비어 있을 때 발생하는 예외"""
    pass


class CancellationRequested(TranslationError):
    """호출자가 번역을 취소했을 때 발생하는 예외"""

    def __init__(self, message: str = "번역이 취소되었습니다"):
        super().__init__(message)


class CacheIOError(TranslationError):
    """캐시 파일 입출력 실패 (캐시 밖으로 전파되지 않음)"""
    pass


class OfflineUnavailableError(TranslationError):
    """
    오프라인 모드가 꺼진 상태에서 원격 번역이 실패했을 때 발생하는 예외
    번역 맥락(원문, 언어 쌍)과 원인 예외를 함께 담습니다.
    """

    def __init__(
        self,
        text: str,
        source_language: str,
        target_language: str,
        cause: Optional[BaseException] = None
    ):
        self.text = text
        self.source_language = source_language
        self.target_language = target_language
        self.cause = cause

        preview = text if len(text) <= 50 else text[:50] + "..."
        reason = f"{type(cause).__name__}: {cause}" if cause else "원격 번역 실패"
        super().__init__(
            f"번역 실패 ({source_language}→{target_language}, 오프라인 모드 비활성): "
            f"'{preview}' - {reason}"
        )


class FailureKind(str, Enum):
    """원격 번역 시도 실패 유형"""
    NETWORK = "network"
    TIMEOUT = "timeout"
    BAD_RESPONSE = "bad_response"
    CANCELLED = "cancelled"
    UNEXPECTED = "unexpected"

    @property
    def is_retryable(self) -> bool:
        return self in (FailureKind.NETWORK, FailureKind.TIMEOUT)


def classify_failure(error: BaseException) -> FailureKind:
    """예외를 실패 유형으로 분류합니다."""
    if isinstance(error, CancellationRequested):
        return FailureKind.CANCELLED
    if isinstance(error, TranslationTimeoutError):
        return FailureKind.TIMEOUT
    if isinstance(error, NetworkError):
        return FailureKind.NETWORK
    if isinstance(error, BadResponseError):
        return FailureKind.BAD_RESPONSE
    return FailureKind.UNEXPECTED
