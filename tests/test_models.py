"""
Dubber 데이터 모델 테스트
"""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from dubber.models.translation import (
    TranscriptionResult,
    TranscriptionSegment,
    TranslatedSegment,
    TranslationOptions,
    TranslationOrigin,
    TranslationRequest,
    TranslationResult,
)


class TestTranslationRequest:
    """TranslationRequest 테스트"""

    def test_payload(self):
        request = TranslationRequest(text="Hello", source_language="en", target_language="tr")
        assert request.to_payload() == {
            "q": "Hello",
            "source": "en",
            "target": "tr",
            "format": "text",
        }

    def test_payload_with_api_key_and_custom_parameters(self):
        request = TranslationRequest(
            text="Hello",
            source_language="en",
            target_language="tr",
            api_key="secret",
            custom_parameters={"alternatives": "2", "format": "html"}
        )
        payload = request.to_payload()

        assert payload["api_key"] == "secret"
        assert payload["alternatives"] == "2"
        assert payload["format"] == "text"

    def test_frozen(self):
        request = TranslationRequest(text="Hello", source_language="en", target_language="tr")
        with pytest.raises(ValidationError):
            request.text = "Bye"


class TestTranslationOptions:
    """TranslationOptions 테스트"""

    def test_defaults(self):
        options = TranslationOptions()
        assert options.source_language == "en"
        assert options.target_language == "tr"
        assert options.custom_parameters == {}

    def test_for_english_turkish(self):
        options = TranslationOptions(source_language="de", target_language="fr", api_key="k")
        forced = options.for_english_turkish()

        assert (forced.source_language, forced.target_language) == ("en", "tr")
        assert forced.api_key == "k"
        assert options.source_language == "de"


class TestSegments:
    """세그먼트 검증 테스트"""

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            TranscriptionSegment(text="hi", start_time=2.0, end_time=1.0)
        with pytest.raises(ValidationError):
            TranslatedSegment(start_time=2.0, end_time=1.0)

    def test_confidence_range(self):
        with pytest.raises(ValidationError):
            TranscriptionSegment(text="hi", start_time=0.0, end_time=1.0, confidence=1.5)

    def test_duration(self):
        segment = TranslatedSegment(start_time=1.0, end_time=3.5)
        assert segment.duration == 2.5

    def test_transcription_full_text(self):
        transcription = TranscriptionResult(segments=[
            TranscriptionSegment(text="Hello", start_time=0.0, end_time=1.0),
            TranscriptionSegment(text="world", start_time=1.0, end_time=2.0),
        ])
        assert transcription.full_text == "Hello world"
        assert transcription.total_segments == 2


class TestTranslationResult:
    """TranslationResult 테스트"""

    def test_degraded_origins(self):
        assert not TranslationResult(origin=TranslationOrigin.REMOTE).is_degraded
        assert not TranslationResult(origin=TranslationOrigin.CACHE).is_degraded
        assert TranslationResult(origin=TranslationOrigin.DICTIONARY).is_degraded
        assert TranslationResult(origin=TranslationOrigin.UNAVAILABLE).is_degraded

    def test_total_segments_without_segments(self):
        assert TranslationResult().total_segments == 0
