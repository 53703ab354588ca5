"""
Dubber 테스트 공용 픽스처
네트워크 없이 동작하는 가짜 번역 클라이언트를 제공합니다.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from dubber.models.translation import LanguageInfo
from dubber.modules.cache import TranslationCache
from dubber.modules.cancellation import run_cancellable
from dubber.modules.remote_client import TranslationClient
from dubber.modules.translator import TranslationService


class FakeTranslationClient(TranslationClient):
    """
    호출 기록을 남기는 가짜 번역 클라이언트

    - responses: 입력 텍스트 → 번역문 (없으면 "TR(텍스트)")
    - failure: 지정하면 fail_after번 성공한 뒤부터 매번 이 예외를 발생
    - hang: True이면 취소될 때까지 응답하지 않음
    """

    def __init__(
        self,
        responses: Optional[dict] = None,
        failure: Optional[Exception] = None,
        fail_after: int = 0,
        reachable: bool = True,
        hang: bool = False,
        languages: Optional[list] = None,
        languages_error: Optional[Exception] = None
    ):
        self.responses = dict(responses or {})
        self.failure = failure
        self.fail_after = fail_after
        self.reachable = reachable
        self.hang = hang
        self.languages = languages or [
            LanguageInfo(code="en", name="English"),
            LanguageInfo(code="tr", name="Turkish"),
        ]
        self.languages_error = languages_error
        self.calls: list[tuple[str, str, str]] = []
        self.probe_count = 0
        self.closed = False

    async def translate(
        self,
        text,
        source_language,
        target_language,
        api_key=None,
        custom_parameters=None,
        cancel_token=None
    ):
        self.calls.append((text, source_language, target_language))

        if self.hang:
            await run_cancellable(asyncio.sleep(3600), cancel_token)

        if self.failure is not None and len(self.calls) > self.fail_after:
            raise self.failure

        return self.responses.get(text, f"TR({text})")

    async def is_reachable(self):
        self.probe_count += 1
        return self.reachable

    async def list_supported_languages(self):
        if self.languages_error is not None:
            raise self.languages_error
        return list(self.languages)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_client():
    return FakeTranslationClient()


@pytest.fixture
def make_service():
    """가짜 클라이언트로 TranslationService를 만드는 팩토리"""

    def _make(client: Optional[FakeTranslationClient] = None, **kwargs) -> TranslationService:
        kwargs.setdefault("retry_backoff", 0.0)
        kwargs.setdefault("cache", TranslationCache(load=False))
        return TranslationService(client=client or FakeTranslationClient(), **kwargs)

    return _make
