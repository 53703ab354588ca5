"""
Dubber 모듈 패키지
번역 핵심 로직을 포함합니다.
"""

from .errors import (
    TranslationError,
    NetworkError,
    TranslationTimeoutError,
    BadResponseError,
    CancellationRequested,
    CacheIOError,
    OfflineUnavailableError,
    FailureKind,
    classify_failure,
)

from .cancellation import (
    CancellationToken,
    run_cancellable,
)

from .phrase_dictionary import (
    PhraseDictionary,
    COMMON_PHRASES,
    IDIOMS,
    PHRASAL_VERBS,
)

from .text_transform import (
    EnglishTurkishPipeline,
    turkish_upper,
    turkish_lower,
)

from .cache import (
    TranslationCache,
    make_cache_key,
)

from .remote_client import (
    TranslationClient,
    LibreTranslateClient,
)

from .translator import (
    TranslationService,
    create_translation_service,
    offline_marker,
)

__all__ = [
    # 예외
    "TranslationError",
    "NetworkError",
    "TranslationTimeoutError",
    "BadResponseError",
    "CancellationRequested",
    "CacheIOError",
    "OfflineUnavailableError",
    "FailureKind",
    "classify_failure",
    # 취소
    "CancellationToken",
    "run_cancellable",
    # 오프라인 사전
    "PhraseDictionary",
    "COMMON_PHRASES",
    "IDIOMS",
    "PHRASAL_VERBS",
    # 전/후처리
    "EnglishTurkishPipeline",
    "turkish_upper",
    "turkish_lower",
    # 캐시
    "TranslationCache",
    "make_cache_key",
    # 원격 클라이언트
    "TranslationClient",
    "LibreTranslateClient",
    # 번역 서비스
    "TranslationService",
    "create_translation_service",
    "offline_marker",
]
