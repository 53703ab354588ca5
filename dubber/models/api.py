"""
Dubber API 요청/응답 모델
"""

from typing import Optional

from pydantic import BaseModel, Field

from .translation import TranscriptionResult, TranslationOptions, TranslationResult


class TextTranslationRequest(BaseModel):
    """단일 텍스트 번역 요청"""
    text: str = Field(..., description="번역할 텍스트")
    source_language: str = Field(default="en", description="원본 언어 코드")
    target_language: str = Field(default="tr", description="번역 언어 코드")
    api_key: Optional[str] = Field(default=None, description="번역 API 키")

    def to_options(self) -> TranslationOptions:
        return TranslationOptions(
            source_language=self.source_language,
            target_language=self.target_language,
            api_key=self.api_key,
        )


class BatchTranslationRequest(BaseModel):
    """배치 번역 요청"""
    texts: list[str] = Field(default_factory=list, description="번역할 텍스트 목록")
    source_language: str = Field(default="en")
    target_language: str = Field(default="tr")
    api_key: Optional[str] = None

    def to_options(self) -> TranslationOptions:
        return TranslationOptions(
            source_language=self.source_language,
            target_language=self.target_language,
            api_key=self.api_key,
        )


class SegmentTranslationRequest(BaseModel):
    """타이밍 보존 세그먼트 번역 요청"""
    transcription: TranscriptionResult
    source_language: str = Field(default="en")
    target_language: str = Field(default="tr")
    api_key: Optional[str] = None

    def to_options(self) -> TranslationOptions:
        return TranslationOptions(
            source_language=self.source_language,
            target_language=self.target_language,
            api_key=self.api_key,
        )


class TranslationResponse(BaseModel):
    """번역 응답"""
    success: bool = Field(..., description="성공 여부")
    message: str = Field(default="", description="응답 메시지")
    data: Optional[TranslationResult] = Field(default=None, description="번역 결과")


class BatchTranslationResponse(BaseModel):
    """배치 번역 응답"""
    success: bool
    message: str = ""
    data: list[TranslationResult] = Field(default_factory=list)
