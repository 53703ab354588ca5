"""
Dubber 번역 코어 설정 모듈
환경 변수 및 애플리케이션 상수를 관리합니다.
"""

from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """
    애플리케이션 설정 클래스
    환경 변수에서 값을 로드하며, 기본값을 제공합니다.
    """

    # 애플리케이션 기본 설정
    APP_NAME: str = "Dubber Translation Core"
    APP_VERSION: str = "0.3.0"
    DEBUG: bool = True

    # 서버 설정
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # 번역 언어 설정
    SOURCE_LANGUAGE: str = "en"
    TARGET_LANGUAGE: str = "tr"

    # LibreTranslate 설정
    LIBRETRANSLATE_URL: str = "https://libretranslate.de/"
    LIBRETRANSLATE_API_KEY: Optional[str] = None

    # 재시도/타임아웃 설정 (초)
    TRANSLATION_MAX_RETRIES: int = 3  # 번역 실패 시 재시도 횟수
    TRANSLATION_RETRY_BACKOFF: float = 0.5  # 시도 순번에 비례해 증가
    TRANSLATION_TIMEOUT: float = 10.0  # 시도당 타임아웃
    REACHABILITY_TIMEOUT: float = 3.0  # 연결 확인용 짧은 타임아웃

    # 오프라인 모드 / 캐시 설정
    ENABLE_OFFLINE_MODE: bool = True
    TRANSLATION_CACHE_PATH: str = "/tmp/dubber/translation_cache.json"
    CACHE_FLUSH_INTERVAL: int = 10  # N개 저장마다 디스크에 기록

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """
    설정 인스턴스를 반환합니다.
    lru_cache를 사용하여 싱글톤 패턴을 구현합니다.
    """
    return Settings()
