"""
Dubber 번역 캐시 모듈

번역 결과를 메모리에 캐싱하고 JSON 파일로 영구 저장합니다.
- 키: "원본언어:번역언어:md5(텍스트 앞 100자)"
- 파일 쓰기는 단일 워커 스레드에서 직렬화되어 호출자를 막지 않습니다.
- 파일 입출력 실패는 경고만 출력하고 메모리 캐시로 계속 동작합니다.

주의: 앞 100자가 같은 긴 텍스트는 같은 키를 공유합니다.
"""

import asyncio
import hashlib
import json
import os
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from threading import Lock
from typing import Callable, Dict, Optional, Union

from .errors import CacheIOError


KEY_TEXT_LIMIT = 100


def make_cache_key(source_language: str, target_language: str, text: str) -> str:
    """캐시 키 생성 (프로세스가 달라도 동일한 값)"""
    digest = hashlib.md5(text[:KEY_TEXT_LIMIT].encode("utf-8")).hexdigest()
    return f"{source_language.lower()}:{target_language.lower()}:{digest}"


class TranslationCache:
    """
    영구 번역 캐시

    Thread-safe 메모리 캐시 + 직렬화된 파일 저장으로 구현됩니다.
    """

    def __init__(
        self,
        cache_path: Optional[Union[str, Path]] = None,
        flush_interval: int = 10,
        load: bool = True
    ):
        """
        Args:
            cache_path: 캐시 파일 경로 (None이면 메모리 전용)
            flush_interval: 이 횟수만큼 저장될 때마다 백그라운드 저장
            load: 생성 시 파일에서 불러올지 여부
        """
        self._entries: Dict[str, str] = {}
        self._lock = Lock()
        self._cache_path = Path(cache_path) if cache_path else None
        self._flush_interval = max(1, flush_interval)
        self._inserts_since_flush = 0
        self._closed = False

        # 파일 쓰기는 한 번에 하나씩
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dubber-cache")

        if load:
            self.load_from_disk()

    @property
    def cache_path(self) -> Optional[Path]:
        return self._cache_path

    def get(self, source_language: str, target_language: str, text: str) -> Optional[str]:
        """캐시된 번역 조회"""
        key = make_cache_key(source_language, target_language, text)
        with self._lock:
            return self._entries.get(key)

    def put(
        self,
        source_language: str,
        target_language: str,
        text: str,
        translated_text: str
    ) -> None:
        """번역 결과 캐싱 (같은 키는 마지막 값으로 덮어씀)"""
        key = make_cache_key(source_language, target_language, text)
        with self._lock:
            self._entries[key] = translated_text
            self._inserts_since_flush += 1
            should_flush = self._inserts_since_flush >= self._flush_interval
            if should_flush:
                self._inserts_since_flush = 0

        if should_flush:
            self.schedule_flush()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def distinct_language_pairs(self) -> int:
        """캐시에 들어 있는 언어 쌍 수"""
        with self._lock:
            pairs = {tuple(key.split(":", 2)[:2]) for key in self._entries}
        return len(pairs)

    def clear(self) -> int:
        """
        전체 캐시 초기화 (파일 삭제는 기다리지 않음)

        대기 중인 저장이 파일을 다시 만들지 않도록 삭제도 같은 워커에서 실행합니다.
        """
        count = self._drop_entries()
        if self._submit(self._delete_file) is None:
            self._delete_file()
        return count

    async def aclear(self) -> int:
        """전체 캐시 초기화 후 파일 삭제까지 기다리는 비동기 버전"""
        count = self._drop_entries()
        future = self._submit(self._delete_file)
        if future is None:
            self._delete_file()
        else:
            await asyncio.wrap_future(future)
        return count

    def _drop_entries(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._inserts_since_flush = 0

        print(f"[Cache] 캐시 초기화: {count}개 항목 제거")
        return count

    # ==========================================
    # 파일 저장/로드
    # ==========================================

    def load_from_disk(self) -> int:
        """
        캐시 파일을 불러옵니다.
        파일이 없으면 빈 캐시, 손상되었으면 경고 후 빈 캐시로 시작합니다.
        """
        if self._cache_path is None:
            return 0

        try:
            loaded = self._read_file()
        except CacheIOError as e:
            print(f"[Cache] 경고: 캐시 로드 실패, 빈 캐시로 시작 - {e}")
            return 0

        with self._lock:
            self._entries.update(loaded)
            count = len(self._entries)

        if loaded:
            print(f"[Cache] 캐시 로드: {len(loaded)}개 항목 ({self._cache_path})")
        return count

    def save_to_disk(self) -> bool:
        """현재 캐시를 파일에 저장합니다 (실패 시 False)."""
        if self._cache_path is None:
            return False

        with self._lock:
            snapshot = dict(self._entries)

        try:
            self._write_file(snapshot)
        except CacheIOError as e:
            print(f"[Cache] 경고: 캐시 저장 실패 - {e}")
            return False

        print(f"[Cache] 캐시 저장: {len(snapshot)}개 항목")
        return True

    def schedule_flush(self) -> Optional[Future]:
        """백그라운드 저장 예약 (완료를 기다리지 않음)"""
        if self._cache_path is None:
            return None
        return self._submit(self.save_to_disk)

    async def flush(self) -> bool:
        """저장이 끝날 때까지 기다리는 비동기 저장 (종료 후에는 False)"""
        if self._cache_path is None:
            return False
        future = self._submit(self.save_to_disk)
        if future is None:
            return False
        return await asyncio.wrap_future(future)

    def close(self, flush: bool = True) -> None:
        """남은 항목을 저장하고 워커를 종료합니다 (여러 번 호출해도 안전)."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if flush and self._cache_path is not None:
                self._executor.submit(self.save_to_disk)
        self._executor.shutdown(wait=True)

    def _submit(self, fn: Callable) -> Optional[Future]:
        """워커에 작업 예약 (종료된 뒤에는 None)"""
        with self._lock:
            if self._closed:
                return None
            return self._executor.submit(fn)

    def _read_file(self) -> Dict[str, str]:
        if not self._cache_path.exists():
            return {}

        try:
            with open(self._cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CacheIOError(f"{self._cache_path}: {e}") from e

        if not isinstance(data, dict):
            raise CacheIOError(f"{self._cache_path}: JSON 객체가 아닙니다")

        return {
            key: value
            for key, value in data.items()
            if isinstance(key, str) and isinstance(value, str)
        }

    def _write_file(self, entries: Dict[str, str]) -> None:
        tmp_path = None
        try:
            self._cache_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._cache_path.parent,
                prefix=".translation_cache_",
                suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(entries, f, ensure_ascii=False)
            os.replace(tmp_path, self._cache_path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise CacheIOError(f"{self._cache_path}: {e}") from e

    def _delete_file(self) -> None:
        if self._cache_path is None:
            return
        try:
            self._cache_path.unlink(missing_ok=True)
        except OSError as e:
            print(f"[Cache] 경고: 캐시 파일 삭제 실패 - {e}")

    def get_stats(self) -> dict:
        """캐시 통계"""
        return {
            "entries": self.size(),
            "language_pairs": self.distinct_language_pairs(),
            "flush_interval": self._flush_interval,
            "cache_path": str(self._cache_path) if self._cache_path else None,
        }
