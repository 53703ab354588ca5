"""
Dubber Translation Core - FastAPI 메인 애플리케이션
온라인/오프라인 복원력을 갖춘 영어 → 터키어 번역 API를 제공합니다.
"""

import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings
from dubber.models import (
    TextTranslationRequest,
    BatchTranslationRequest,
    SegmentTranslationRequest,
    TranslationResponse,
    BatchTranslationResponse,
)
from dubber.modules import (
    TranslationService,
    TranslationError,
    OfflineUnavailableError,
    create_translation_service,
)


settings = get_settings()

_service: Optional[TranslationService] = None


def get_service() -> TranslationService:
    """번역 서비스 인스턴스 반환 (테스트에서 dependency_overrides로 교체)"""
    global _service
    if _service is None:
        _service = create_translation_service(settings)
    return _service


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # 종료 시 캐시 저장
    if _service is not None:
        await _service.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Dubber Translation Core - 오프라인 대체를 지원하는 영어 → 터키어 번역 API",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:*",
        "http://127.0.0.1:*",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===== 요청 로깅 미들웨어 =====

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    # 번역 요청만 상세 로깅
    if "/translate" in request.url.path and request.method == "POST":
        print(f"\n{'='*60}")
        print(f"[REQUEST] 번역 요청: {request.url.path}")
        print(f"  Client: {request.client.host if request.client else 'unknown'}")
        print(f"  Time: {time.strftime('%H:%M:%S')}")
        print(f"{'='*60}")

    response = await call_next(request)

    duration = time.time() - start_time

    if "/translate" in request.url.path and request.method == "POST":
        print(f"[RESPONSE] 완료 ({duration:.2f}초, status={response.status_code})")

    return response


# ===== Health =====

@app.get("/", tags=["Health"])
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health", tags=["Health"])
async def health_check(service: TranslationService = Depends(get_service)):
    online = await service.is_online()

    return {
        "status": "healthy",
        "translation_server": "connected" if online else "disconnected",
        "offline_mode": service.enable_offline_mode,
        "translation_cache": service.cache.get_stats(),
    }


# ===== Translation =====

@app.post("/api/v1/translate", tags=["Translation"])
async def translate_text(
    request: TextTranslationRequest,
    service: TranslationService = Depends(get_service)
) -> TranslationResponse:
    """단일 텍스트를 번역합니다."""
    result = await service.translate_text(request.text, request.to_options())

    return TranslationResponse(
        success=True,
        message=f"번역 완료 ({result.origin.value})",
        data=result
    )


@app.post("/api/v1/translate/batch", tags=["Translation"])
async def translate_batch(
    request: BatchTranslationRequest,
    service: TranslationService = Depends(get_service)
) -> BatchTranslationResponse:
    """여러 텍스트를 한 번에 번역합니다."""
    results = await service.translate_texts(request.texts, request.to_options())

    return BatchTranslationResponse(
        success=True,
        message=f"{len(results)}개 번역 완료",
        data=results
    )


@app.post("/api/v1/translate/segments", tags=["Translation"])
async def translate_segments(
    request: SegmentTranslationRequest,
    service: TranslationService = Depends(get_service)
) -> TranslationResponse:
    """음성 인식 세그먼트를 타이밍을 유지한 채 번역합니다."""
    result = await service.translate_segments(request.transcription, request.to_options())

    return TranslationResponse(
        success=True,
        message=f"세그먼트 번역 완료 ({result.total_segments}개)",
        data=result
    )


@app.post("/api/v1/translate/enhanced", tags=["Translation"])
async def translate_enhanced(
    request: TextTranslationRequest,
    service: TranslationService = Depends(get_service)
) -> TranslationResponse:
    """관용구/축약형/구동사 전처리와 터키어 후처리를 적용해 번역합니다."""
    result = await service.translate_text_enhanced(request.text, request.to_options())

    return TranslationResponse(
        success=True,
        message=f"번역 완료 ({result.origin.value})",
        data=result
    )


@app.get("/api/v1/languages", tags=["Translation"])
async def list_languages(service: TranslationService = Depends(get_service)) -> dict:
    """번역 서버가 지원하는 언어 목록을 조회합니다."""
    languages = await service.get_available_languages()

    return {
        "success": True,
        "languages": languages,
        "total_count": len(languages),
    }


# ===== Cache =====

@app.get("/api/v1/cache/stats", tags=["Cache"])
async def get_cache_stats(service: TranslationService = Depends(get_service)):
    """캐시 통계 조회"""
    size, language_pairs = service.get_cache_statistics()
    return {
        "success": True,
        "cache_size": size,
        "language_pairs": language_pairs,
        "translation_cache": service.cache.get_stats(),
    }


@app.post("/api/v1/cache/flush", tags=["Cache"])
async def flush_cache(service: TranslationService = Depends(get_service)):
    """캐시를 파일에 저장"""
    saved = await service.flush_cache()
    return {
        "success": saved,
        "cache_size": service.cache.size(),
    }


@app.delete("/api/v1/cache", tags=["Cache"])
async def clear_all_cache(service: TranslationService = Depends(get_service)):
    """전체 캐시 초기화 (캐시 파일 포함)"""
    cleared = await service.clear_cache()
    return {
        "success": True,
        "translation_cleared": cleared,
    }


# ===== 예외 핸들러 =====

@app.exception_handler(OfflineUnavailableError)
async def offline_unavailable_handler(request, exc: OfflineUnavailableError):
    print(f"[API] 번역 불가: {exc}")
    return JSONResponse(status_code=503, content={"success": False, "message": str(exc)})


@app.exception_handler(TranslationError)
async def translation_error_handler(request, exc: TranslationError):
    print(f"[API] 번역 오류: {exc}")
    return JSONResponse(status_code=502, content={"success": False, "message": str(exc)})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dubber.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
