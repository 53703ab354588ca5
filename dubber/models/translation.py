"""
Dubber 번역 데이터 모델
Pydantic을 사용하여 전사(transcription)와 번역 결과 구조를 정의합니다.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# 원격 API 요청 본문에서 사용자 파라미터로 덮어쓸 수 없는 필드
RESERVED_PAYLOAD_FIELDS = ("q", "source", "target", "format", "api_key")


class TranslationOrigin(str, Enum):
    """번역문 출처"""
    REMOTE = "remote"            # 원격 번역 API
    CACHE = "cache"              # 영구 캐시
    DICTIONARY = "dictionary"    # 오프라인 구문 사전
    IDIOM = "idiom"              # 관용구 치환
    UNAVAILABLE = "unavailable"  # 번역 불가 (원문 + 오프라인 표시)
    MIXED = "mixed"              # 세그먼트별 출처가 섞임
    PASSTHROUGH = "passthrough"  # 빈 입력 (번역 없이 그대로 반환)


class TranslationOptions(BaseModel):
    """번역 설정"""
    source_language: str = Field(default="en", description="원본 언어 코드")
    target_language: str = Field(default="tr", description="번역 언어 코드")
    api_key: Optional[str] = Field(default=None, description="번역 API 키")
    custom_parameters: dict[str, str] = Field(
        default_factory=dict,
        description="원격 API에 그대로 전달할 추가 파라미터"
    )

    def for_english_turkish(self) -> "TranslationOptions":
        """영어 → 터키어로 고정된 복사본을 반환합니다."""
        return self.model_copy(update={"source_language": "en", "target_language": "tr"})


class TranslationRequest(BaseModel):
    """
    원격 번역 요청 (호출 단위로 불변)
    """
    model_config = ConfigDict(frozen=True)

    text: str
    source_language: str
    target_language: str
    api_key: Optional[str] = None
    custom_parameters: dict[str, str] = Field(default_factory=dict)

    def to_payload(self) -> dict:
        """LibreTranslate 요청 본문 생성"""
        payload = {
            key: value
            for key, value in self.custom_parameters.items()
            if key not in RESERVED_PAYLOAD_FIELDS
        }
        payload.update({
            "q": self.text,
            "source": self.source_language,
            "target": self.target_language,
            "format": "text",
        })
        if self.api_key:
            payload["api_key"] = self.api_key
        return payload


class LibreTranslateResponse(BaseModel):
    """원격 번역 응답"""
    translatedText: str


class LanguageInfo(BaseModel):
    """지원 언어 정보"""
    code: str
    name: str = ""


class TranscriptionSegment(BaseModel):
    """
    음성 인식 세그먼트
    외부 STT 컴포넌트가 생성합니다.
    """
    text: str = Field(default="", description="인식된 텍스트")
    start_time: float = Field(..., ge=0, description="시작 시간 (초)")
    end_time: float = Field(..., ge=0, description="종료 시간 (초)")
    confidence: float = Field(default=0.0, ge=0, le=1, description="인식 신뢰도")

    @field_validator("end_time")
    @classmethod
    def end_must_be_after_start(cls, v: float, info) -> float:
        """종료 시간은 시작 시간보다 작을 수 없습니다."""
        if "start_time" in info.data and v < info.data["start_time"]:
            raise ValueError("종료 시간은 시작 시간보다 작을 수 없습니다")
        return v


class TranscriptionResult(BaseModel):
    """전체 음성 인식 결과"""
    segments: list[TranscriptionSegment] = Field(default_factory=list)
    language_code: str = Field(default="en-US", description="인식 언어 코드")
    audio_file_path: str = Field(default="", description="원본 오디오 경로")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def full_text(self) -> str:
        """전체 텍스트 (공백으로 연결)"""
        return " ".join(segment.text for segment in self.segments)

    @property
    def total_segments(self) -> int:
        return len(self.segments)


class TranslatedSegment(BaseModel):
    """
    번역된 세그먼트
    원본 세그먼트의 타이밍을 그대로 유지합니다.
    """
    source_text: str = ""
    translated_text: str = ""
    start_time: float = Field(..., ge=0, description="시작 시간 (초)")
    end_time: float = Field(..., ge=0, description="종료 시간 (초)")
    source_confidence: float = Field(default=0.0, ge=0, le=1)

    @field_validator("end_time")
    @classmethod
    def end_must_be_after_start(cls, v: float, info) -> float:
        """종료 시간은 시작 시간보다 작을 수 없습니다."""
        if "start_time" in info.data and v < info.data["start_time"]:
            raise ValueError("종료 시간은 시작 시간보다 작을 수 없습니다")
        return v

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class TranslationResult(BaseModel):
    """번역 결과"""
    source_text: str = ""
    translated_text: str = ""
    source_language: str = "en"
    target_language: str = "tr"
    timestamp: datetime = Field(default_factory=datetime.now)
    segments: Optional[list[TranslatedSegment]] = None
    origin: TranslationOrigin = TranslationOrigin.REMOTE

    @property
    def total_segments(self) -> int:
        return len(self.segments) if self.segments else 0

    @property
    def is_degraded(self) -> bool:
        """원격 번역이나 캐시가 아닌 오프라인 대체 결과인지 여부"""
        return self.origin not in (
            TranslationOrigin.REMOTE,
            TranslationOrigin.CACHE,
            TranslationOrigin.PASSTHROUGH,
        )
