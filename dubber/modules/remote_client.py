"""
Dubber 원격 번역 클라이언트 모듈

LibreTranslate 호환 HTTP API를 호출합니다.
- POST translate: {q, source, target, format, api_key?} → {translatedText}
- GET languages: [{code, name}, ...]

재시도와 오프라인 대체는 TranslationService가 담당하며,
이 모듈은 한 번의 시도와 실패 유형 분류만 책임집니다.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Mapping, Optional

import httpx
from pydantic import ValidationError

from dubber.models.translation import LanguageInfo, LibreTranslateResponse, TranslationRequest
from dubber.utils.parsers import to_two_letter_code

from .cancellation import CancellationToken, run_cancellable
from .errors import BadResponseError, NetworkError, TranslationTimeoutError


class TranslationClient(ABC):
    """원격 번역 클라이언트 인터페이스"""

    @abstractmethod
    async def translate(
        self,
        text: str,
        source_language: str,
        target_language: str,
        api_key: Optional[str] = None,
        custom_parameters: Optional[Mapping[str, str]] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> str:
        """
        한 번의 원격 번역 시도

        Raises:
            TranslationTimeoutError, NetworkError, BadResponseError, CancellationRequested
        """
        pass

    @abstractmethod
    async def is_reachable(self) -> bool:
        """가벼운 연결 확인 (실패 시 False, 예외 없음)"""
        pass

    @abstractmethod
    async def list_supported_languages(self) -> list[LanguageInfo]:
        pass

    async def aclose(self) -> None:
        """연결 자원 정리"""
        pass


class LibreTranslateClient(TranslationClient):
    """LibreTranslate HTTP 클라이언트"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        probe_timeout: float = 3.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            base_url: API 기본 URL (예: https://libretranslate.de/)
            timeout: 번역 시도당 타임아웃 (초)
            probe_timeout: 연결 확인 타임아웃 (초)
            transport: 테스트용 httpx 전송 계층
        """
        self.base_url = base_url
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport
        )

    async def translate(
        self,
        text: str,
        source_language: str,
        target_language: str,
        api_key: Optional[str] = None,
        custom_parameters: Optional[Mapping[str, str]] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> str:
        request = TranslationRequest(
            text=text,
            source_language=to_two_letter_code(source_language),
            target_language=to_two_letter_code(target_language),
            api_key=api_key,
            custom_parameters=dict(custom_parameters or {})
        )

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        try:
            return await run_cancellable(
                asyncio.wait_for(self._post_translate(request), timeout=self.timeout),
                cancel_token
            )
        except asyncio.TimeoutError as e:
            raise TranslationTimeoutError(
                f"번역 요청 시간 초과 ({self.timeout}s)"
            ) from e

    async def _post_translate(self, request: TranslationRequest) -> str:
        try:
            response = await self._client.post("translate", json=request.to_payload())
        except httpx.TimeoutException as e:
            raise TranslationTimeoutError(f"번역 요청 시간 초과: {e}") from e
        except httpx.TransportError as e:
            raise NetworkError(f"번역 서버 연결 실패: {e}") from e

        status = response.status_code
        if status == 429 or status >= 500:
            raise NetworkError(f"번역 서버 오류: HTTP {status}")
        if status >= 400:
            raise BadResponseError(f"번역 요청 거부: HTTP {status} - {response.text[:200]}")

        try:
            parsed = LibreTranslateResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise BadResponseError(f"잘못된 번역 응답: {e}") from e

        if not parsed.translatedText.strip():
            raise BadResponseError("번역 응답에 번역문이 없습니다")

        return parsed.translatedText

    async def is_reachable(self) -> bool:
        try:
            response = await self._client.get("languages", timeout=self.probe_timeout)
            return response.status_code == 200
        except Exception as e:
            print(f"[RemoteClient] 연결 확인 실패: {e}")
            return False

    async def list_supported_languages(self) -> list[LanguageInfo]:
        try:
            response = await self._client.get("languages")
        except httpx.TimeoutException as e:
            raise TranslationTimeoutError(f"언어 목록 요청 시간 초과: {e}") from e
        except httpx.TransportError as e:
            raise NetworkError(f"번역 서버 연결 실패: {e}") from e

        if response.status_code != 200:
            raise BadResponseError(f"언어 목록 요청 실패: HTTP {response.status_code}")

        try:
            data = response.json()
            if not isinstance(data, list):
                raise ValueError("언어 목록이 배열이 아닙니다")
            return [LanguageInfo.model_validate(item) for item in data]
        except (ValueError, ValidationError) as e:
            raise BadResponseError(f"잘못된 언어 목록 응답: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()
