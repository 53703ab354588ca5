"""
Dubber 번역 서비스 모듈 (온라인/오프라인 복원력 계층)

단일 텍스트 번역 흐름:
1. 영어 → 터키어이면 관용구 태깅 (캐시 키도 태깅된 텍스트 기준)
2. 캐시 조회 (히트 시 네트워크 없이 즉시 반환)
3. 원격 번역 최대 max_retries회 시도
   - 타임아웃/네트워크 오류: 선형 백오프 후 재시도
   - 잘못된 응답/예상치 못한 오류: 즉시 오프라인 대체
   - 호출자 취소: 즉시 전파
4. 오프라인 대체: 캐시 재확인 → 구문 사전 → 관용구 치환 → 원문 + 오프라인 표시
"""

from typing import Callable, Iterable, Optional

from config import Settings, get_settings
from dubber.models.translation import (
    TranscriptionResult,
    TranslatedSegment,
    TranslationOptions,
    TranslationOrigin,
    TranslationResult,
)
from dubber.utils.parsers import to_two_letter_code

from .cache import TranslationCache
from .cancellation import CancellationToken, run_cancellable
from .errors import FailureKind, OfflineUnavailableError, classify_failure
from .phrase_dictionary import PhraseDictionary
from .remote_client import LibreTranslateClient, TranslationClient
from .text_transform import EnglishTurkishPipeline


ProgressCallback = Callable[[float], None]

OFFLINE_MARKERS = {
    "tr": "[Çeviri kullanılamıyor - çevrimdışı mod]",
}
DEFAULT_OFFLINE_MARKER = "[Translation not available - offline mode]"


def offline_marker(target_language: str) -> str:
    """번역 언어에 맞는 오프라인 표시 문구"""
    return OFFLINE_MARKERS.get(to_two_letter_code(target_language), DEFAULT_OFFLINE_MARKER)


def _report_progress(on_progress: Optional[ProgressCallback], value: float) -> None:
    if on_progress is not None:
        on_progress(value)


def _check_cancelled(cancel_token: Optional[CancellationToken]) -> None:
    if cancel_token is not None:
        cancel_token.raise_if_cancelled()


class TranslationService:
    """
    캐시/사전/관용구 대체를 갖춘 원격 번역 서비스

    캐시와 사전은 생성 시 주입되며 전역 상태를 사용하지 않습니다.
    """

    def __init__(
        self,
        client: TranslationClient,
        cache: Optional[TranslationCache] = None,
        dictionary: Optional[PhraseDictionary] = None,
        pipeline: Optional[EnglishTurkishPipeline] = None,
        default_options: Optional[TranslationOptions] = None,
        enable_offline_mode: bool = True,
        max_retries: int = 3,
        retry_backoff: float = 0.5
    ):
        """
        Args:
            client: 원격 번역 클라이언트
            cache: 번역 캐시 (None이면 메모리 전용 캐시)
            dictionary: 오프라인 구문 사전
            pipeline: 영어 → 터키어 전/후처리 파이프라인
            default_options: options 없이 호출될 때 사용할 설정
            enable_offline_mode: False이면 원격 실패 시 OfflineUnavailableError 발생
            max_retries: 원격 시도 횟수 (최소 1)
            retry_backoff: 재시도 대기 단위 (초, 시도마다 선형 증가)
        """
        self.client = client
        self.cache = cache if cache is not None else TranslationCache(load=False)
        self.dictionary = dictionary if dictionary is not None else PhraseDictionary()
        self.pipeline = pipeline or EnglishTurkishPipeline(self.dictionary)
        self.default_options = default_options or TranslationOptions()
        self.enable_offline_mode = enable_offline_mode
        self.max_retries = max(1, max_retries)
        self.retry_backoff = max(0.0, retry_backoff)

        print(
            f"[Translator] 초기화: 재시도={self.max_retries}, "
            f"오프라인 모드={'켜짐' if enable_offline_mode else '꺼짐'}, "
            f"캐시={self.cache.size()}개"
        )

    # ==========================================
    # 공개 API
    # ==========================================

    async def translate_text(
        self,
        text: str,
        options: Optional[TranslationOptions] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> TranslationResult:
        """단일 텍스트 번역"""
        opts = options or self.default_options
        translated, origin = await self._translate_with_fallback(text, opts, cancel_token)
        return self._build_result(text, translated, opts, origin)

    async def translate_texts(
        self,
        texts: Iterable[str],
        options: Optional[TranslationOptions] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> list[TranslationResult]:
        """
        여러 텍스트 번역

        연결 상태를 한 번만 확인하고, 오프라인이면 모든 항목을
        재시도 없이 바로 오프라인 대체로 처리합니다.
        """
        opts = options or self.default_options
        texts = list(texts)
        if not texts:
            return []

        online = await self._probe(cancel_token)
        print(f"[Translator] 일괄 번역 시작: {len(texts)}개 ({'온라인' if online else '오프라인'})")

        results = []
        for text in texts:
            _check_cancelled(cancel_token)

            if online or not self.enable_offline_mode:
                translated, origin = await self._translate_with_fallback(text, opts, cancel_token)
            else:
                translated, origin = self._offline_fallback(text, opts)

            results.append(self._build_result(text, translated, opts, origin))

        print(f"[Translator] 일괄 번역 완료: {len(results)}개")
        return results

    async def translate_segments(
        self,
        transcription: TranscriptionResult,
        options: Optional[TranslationOptions] = None,
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> TranslationResult:
        """
        세그먼트 단위 번역 (원본 타이밍 유지)

        세그먼트 번역이 실패하면 남은 세그먼트는 모두 오프라인으로 처리합니다.
        """
        opts = options or self.default_options
        segments = transcription.segments
        total = len(segments)

        if total == 0:
            _report_progress(on_progress, 1.0)
            return self._build_result("", "", opts, TranslationOrigin.PASSTHROUGH, segments=[])

        use_remote = await self._probe(cancel_token) or not self.enable_offline_mode
        print(f"[Translator] 세그먼트 번역 시작: {total}개")

        translated_segments = []
        origins = set()

        for index, segment in enumerate(segments):
            _check_cancelled(cancel_token)

            if use_remote:
                try:
                    translated, origin = await self._translate_remote(
                        segment.text, opts, cancel_token
                    )
                except Exception as e:
                    if classify_failure(e) is FailureKind.CANCELLED:
                        raise
                    translated, origin = self._fallback_or_raise(segment.text, opts, e)
                    use_remote = False
                    print(f"[Translator] 세그먼트 {index + 1} 실패, 남은 세그먼트는 오프라인 처리")
            else:
                translated, origin = self._offline_fallback(segment.text, opts)

            translated_segments.append(TranslatedSegment(
                source_text=segment.text,
                translated_text=translated,
                start_time=segment.start_time,
                end_time=segment.end_time,
                source_confidence=segment.confidence
            ))
            origins.add(origin)

            _report_progress(on_progress, (index + 1) / total)

        result = self._build_result(
            transcription.full_text,
            " ".join(seg.translated_text for seg in translated_segments),
            opts,
            origins.pop() if len(origins) == 1 else TranslationOrigin.MIXED,
            segments=translated_segments
        )

        print(f"[Translator] 세그먼트 번역 완료: {total}개")
        return result

    async def translate_text_enhanced(
        self,
        text: str,
        options: Optional[TranslationOptions] = None,
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> TranslationResult:
        """
        전/후처리 파이프라인을 모두 적용한 번역
        진행률: 전처리 후 0.1, 번역 후 0.7, 완료 시 1.0
        """
        opts = options or self.default_options
        enhanced = self.pipeline.applies_to(opts.source_language, opts.target_language)

        prepared = self.pipeline.pre_process(text) if enhanced else text
        _report_progress(on_progress, 0.1)

        translated, origin = await self._translate_with_fallback(prepared, opts, cancel_token)
        _report_progress(on_progress, 0.7)

        if origin is TranslationOrigin.UNAVAILABLE:
            # 플레이스홀더가 남지 않도록 호출자의 원문에 표시를 붙임
            translated = f"{text} {offline_marker(opts.target_language)}"
        elif enhanced:
            translated = self.pipeline.post_process(translated)
        _report_progress(on_progress, 1.0)

        return self._build_result(text, translated, opts, origin)

    async def translate_english_to_turkish(
        self,
        text: str,
        options: Optional[TranslationOptions] = None,
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> TranslationResult:
        """영어 → 터키어 고정 전/후처리 번역"""
        opts = (options or self.default_options).for_english_turkish()
        return await self.translate_text_enhanced(text, opts, on_progress, cancel_token)

    async def translate_transcription_english_to_turkish(
        self,
        transcription: TranscriptionResult,
        options: Optional[TranslationOptions] = None,
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> TranslationResult:
        """영어 → 터키어 고정 세그먼트 번역"""
        opts = (options or self.default_options).for_english_turkish()
        return await self.translate_segments(transcription, opts, on_progress, cancel_token)

    # ==========================================
    # 캐시/상태
    # ==========================================

    def get_cache_statistics(self) -> tuple[int, int]:
        """(캐시 항목 수, 언어 쌍 수)"""
        return self.cache.size(), self.cache.distinct_language_pairs()

    async def clear_cache(self) -> int:
        """캐시를 비우고 파일 삭제까지 기다립니다 (이벤트 루프는 막지 않음)."""
        return await self.cache.aclear()

    async def flush_cache(self) -> bool:
        return await self.cache.flush()

    async def is_online(self) -> bool:
        return await self.client.is_reachable()

    async def get_available_languages(self) -> dict[str, str]:
        """지원 언어 {코드: 이름}"""
        languages = await self.client.list_supported_languages()
        return {language.code: language.name for language in languages}

    async def aclose(self) -> None:
        """캐시를 저장하고 연결을 정리합니다."""
        await self.cache.flush()
        self.cache.close(flush=False)
        await self.client.aclose()
        print("[Translator] 종료")

    # ==========================================
    # 내부 번역 흐름
    # ==========================================

    def _is_enhanced_pair(self, options: TranslationOptions) -> bool:
        return self.pipeline.applies_to(options.source_language, options.target_language)

    def _cache_text(self, text: str, options: TranslationOptions) -> str:
        """캐시 키에 사용할 텍스트 (영어 → 터키어는 관용구 태깅 후)"""
        if self._is_enhanced_pair(options):
            return self.pipeline.tag_idioms(text)
        return text

    async def _probe(self, cancel_token: Optional[CancellationToken]) -> bool:
        _check_cancelled(cancel_token)
        return await run_cancellable(self.client.is_reachable(), cancel_token)

    async def _translate_with_fallback(
        self,
        text: str,
        options: TranslationOptions,
        cancel_token: Optional[CancellationToken]
    ) -> tuple[str, TranslationOrigin]:
        try:
            return await self._translate_remote(text, options, cancel_token)
        except Exception as e:
            if classify_failure(e) is FailureKind.CANCELLED:
                raise
            return self._fallback_or_raise(text, options, e)

    async def _translate_remote(
        self,
        text: str,
        options: TranslationOptions,
        cancel_token: Optional[CancellationToken]
    ) -> tuple[str, TranslationOrigin]:
        """
        캐시 확인 후 원격 번역을 시도합니다.
        모든 시도가 실패하면 마지막 오류를 그대로 발생시킵니다.
        """
        _check_cancelled(cancel_token)

        if not text or not text.strip():
            return text or "", TranslationOrigin.PASSTHROUGH

        source = options.source_language
        target = options.target_language
        enhanced = self._is_enhanced_pair(options)
        work_text = self._cache_text(text, options)

        cached = self.cache.get(source, target, work_text)
        if cached is not None:
            print(f"[Translator] 캐시 히트: {source}→{target}")
            return cached, TranslationOrigin.CACHE

        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            _check_cancelled(cancel_token)
            try:
                raw = await self.client.translate(
                    work_text,
                    source,
                    target,
                    api_key=options.api_key,
                    custom_parameters=options.custom_parameters,
                    cancel_token=cancel_token
                )
            except Exception as e:
                kind = classify_failure(e)
                if kind is FailureKind.CANCELLED:
                    raise
                last_error = e
                print(f"[Translator] 번역 시도 {attempt + 1}/{self.max_retries} 실패 ({kind.value}): {e}")

                if not kind.is_retryable:
                    break
                if attempt < self.max_retries - 1:
                    await self._backoff(attempt, cancel_token)
                continue

            translated = self.pipeline.post_process(raw) if enhanced else raw
            self.cache.put(source, target, work_text, translated)
            return translated, TranslationOrigin.REMOTE

        raise last_error

    async def _backoff(self, attempt: int, cancel_token: Optional[CancellationToken]) -> None:
        """선형 백오프 (취소 가능)"""
        delay = self.retry_backoff * (attempt + 1)
        if cancel_token is None:
            cancel_token = CancellationToken()
        await cancel_token.sleep(delay)

    def _fallback_or_raise(
        self,
        text: str,
        options: TranslationOptions,
        error: Exception
    ) -> tuple[str, TranslationOrigin]:
        if not self.enable_offline_mode:
            print(f"[Translator] 번역 실패 (오프라인 모드 꺼짐): {error}")
            raise OfflineUnavailableError(
                text, options.source_language, options.target_language, error
            ) from error

        print(f"[Translator] 오프라인 대체 사용: {type(error).__name__}")
        return self._offline_fallback(text, options)

    def _offline_fallback(
        self,
        text: str,
        options: TranslationOptions
    ) -> tuple[str, TranslationOrigin]:
        """캐시 재확인 → 구문 사전 → 관용구 치환 → 원문 + 오프라인 표시"""
        if not text or not text.strip():
            return text or "", TranslationOrigin.PASSTHROUGH

        source = options.source_language
        target = options.target_language

        cached = self.cache.get(source, target, self._cache_text(text, options))
        if cached is not None:
            return cached, TranslationOrigin.CACHE

        if self._is_enhanced_pair(options):
            phrase = self.dictionary.lookup(text)
            if phrase is not None:
                return phrase, TranslationOrigin.DICTIONARY

            substituted = self.pipeline.substitute_idioms(text)
            if substituted != text:
                return self.pipeline.post_process(substituted), TranslationOrigin.IDIOM

        return f"{text} {offline_marker(target)}", TranslationOrigin.UNAVAILABLE

    def _build_result(
        self,
        source_text: str,
        translated_text: str,
        options: TranslationOptions,
        origin: TranslationOrigin,
        segments: Optional[list[TranslatedSegment]] = None
    ) -> TranslationResult:
        return TranslationResult(
            source_text=source_text,
            translated_text=translated_text,
            source_language=options.source_language,
            target_language=options.target_language,
            segments=segments,
            origin=origin
        )


def create_translation_service(
    settings: Optional[Settings] = None,
    client: Optional[TranslationClient] = None
) -> TranslationService:
    """설정값으로 번역 서비스를 구성합니다."""
    settings = settings or get_settings()

    client = client or LibreTranslateClient(
        base_url=settings.LIBRETRANSLATE_URL,
        timeout=settings.TRANSLATION_TIMEOUT,
        probe_timeout=settings.REACHABILITY_TIMEOUT
    )
    cache = TranslationCache(
        cache_path=settings.TRANSLATION_CACHE_PATH,
        flush_interval=settings.CACHE_FLUSH_INTERVAL
    )
    dictionary = PhraseDictionary()

    return TranslationService(
        client=client,
        cache=cache,
        dictionary=dictionary,
        pipeline=EnglishTurkishPipeline(dictionary),
        default_options=TranslationOptions(
            source_language=settings.SOURCE_LANGUAGE,
            target_language=settings.TARGET_LANGUAGE,
            api_key=settings.LIBRETRANSLATE_API_KEY
        ),
        enable_offline_mode=settings.ENABLE_OFFLINE_MODE,
        max_retries=settings.TRANSLATION_MAX_RETRIES,
        retry_backoff=settings.TRANSLATION_RETRY_BACKOFF
    )
