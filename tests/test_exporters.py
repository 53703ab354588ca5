"""
Dubber 번역 결과 저장 테스트
"""

import json
import sys
from pathlib import Path

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from dubber.models.translation import TranslatedSegment, TranslationOrigin, TranslationResult
from dubber.utils.exporters import load_translation, save_translation


def make_result() -> TranslationResult:
    return TranslationResult(
        source_text="Hello friend",
        translated_text="Merhaba arkadaşım",
        source_language="en",
        target_language="tr",
        origin=TranslationOrigin.REMOTE,
        segments=[
            TranslatedSegment(
                source_text="Hello friend",
                translated_text="Merhaba arkadaşım",
                start_time=0.0,
                end_time=1.2,
                source_confidence=0.95
            )
        ]
    )


class TestSaveTranslation:
    """save_translation 테스트"""

    def test_save_txt(self, tmp_path):
        path = save_translation(make_result(), tmp_path / "out" / "result.txt")

        assert path.read_text(encoding="utf-8") == "Merhaba arkadaşım"

    def test_save_json_and_load(self, tmp_path):
        path = save_translation(make_result(), tmp_path / "result.json", fmt="JSON")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["translated_text"] == "Merhaba arkadaşım"
        assert data["origin"] == "remote"

        loaded = load_translation(path)
        assert loaded.translated_text == "Merhaba arkadaşım"
        assert loaded.total_segments == 1
        assert loaded.segments[0].end_time == 1.2

    def test_empty_result_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            save_translation(TranslationResult(), tmp_path / "empty.txt")

    def test_unknown_format_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            save_translation(make_result(), tmp_path / "result.srt", fmt="srt")
        assert not (tmp_path / "result.srt").exists()
