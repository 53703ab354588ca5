"""
Dubber 번역 결과 저장 모듈
번역 결과를 텍스트 또는 JSON 파일로 저장하고 다시 읽어옵니다.
"""

from pathlib import Path
from typing import Union

from dubber.models.translation import TranslationResult


SUPPORTED_FORMATS = ("txt", "json")


def save_translation(
    result: TranslationResult,
    output_path: Union[str, Path],
    fmt: str = "txt"
) -> Path:
    """
    번역 결과를 파일로 저장합니다.

    Args:
        result: 저장할 번역 결과
        output_path: 저장 경로 (상위 디렉토리는 자동 생성)
        fmt: "txt" (번역문만) 또는 "json" (전체 구조)

    Returns:
        저장된 파일 경로

    Raises:
        ValueError: 번역문이 비어 있거나 지원하지 않는 형식일 때
    """
    if result is None or not result.translated_text:
        raise ValueError("번역 결과가 비어 있습니다")

    fmt = fmt.lower()
    if fmt == "txt":
        content = result.translated_text
    elif fmt == "json":
        content = result.model_dump_json(indent=2)
    else:
        raise ValueError(f"지원하지 않는 형식입니다: {fmt} (지원: {', '.join(SUPPORTED_FORMATS)})")

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")

    print(f"[Exporter] 저장 완료: {path} ({fmt})")
    return path


def load_translation(input_path: Union[str, Path]) -> TranslationResult:
    """JSON으로 저장된 번역 결과를 읽어옵니다."""
    path = Path(input_path)
    return TranslationResult.model_validate_json(path.read_text(encoding="utf-8"))
