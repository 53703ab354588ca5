"""
Dubber 데이터 모델 패키지
"""

from .translation import (
    TranslationOrigin,
    TranslationOptions,
    TranslationRequest,
    LibreTranslateResponse,
    LanguageInfo,
    TranscriptionSegment,
    TranscriptionResult,
    TranslatedSegment,
    TranslationResult,
)
from .api import (
    TextTranslationRequest,
    BatchTranslationRequest,
    SegmentTranslationRequest,
    TranslationResponse,
    BatchTranslationResponse,
)

__all__ = [
    "TranslationOrigin",
    "TranslationOptions",
    "TranslationRequest",
    "LibreTranslateResponse",
    "LanguageInfo",
    "TranscriptionSegment",
    "TranscriptionResult",
    "TranslatedSegment",
    "TranslationResult",
    "TextTranslationRequest",
    "BatchTranslationRequest",
    "SegmentTranslationRequest",
    "TranslationResponse",
    "BatchTranslationResponse",
]
