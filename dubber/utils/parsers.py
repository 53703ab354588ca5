"""
Dubber 유틸리티 함수 모듈
언어 코드 변환, 텍스트 정규화 등 공통 기능을 제공합니다.
"""

import re
from typing import Optional


# 원격 API가 기대하는 2자리 코드와 다른 지역 코드 매핑
_LANGUAGE_CODE_ALIASES = {
    "en-us": "en",
    "en-gb": "en",
    "tr-tr": "tr",
}


def to_two_letter_code(language_code: Optional[str]) -> str:
    """
    표준 언어 코드를 LibreTranslate 호환 2자리 코드로 변환합니다.

    예:
    - en-US → en
    - tr_TR → tr
    - EN → en

    Args:
        language_code: 언어 코드 (지역 코드 포함 가능)

    Returns:
        소문자 2자리(또는 기본) 언어 코드, 입력이 비어 있으면 빈 문자열
    """
    if not language_code:
        return ""

    code = language_code.strip().lower().replace("_", "-")
    if code in _LANGUAGE_CODE_ALIASES:
        return _LANGUAGE_CODE_ALIASES[code]

    # 지역 코드 제거 (첫 부분만 사용)
    return code.split("-")[0]


def normalize_phrase(text: Optional[str]) -> str:
    """
    사전 조회용 정규화 (앞뒤 공백 제거 + 소문자)

    Args:
        text: 원본 텍스트

    Returns:
        정규화된 텍스트
    """
    if not text:
        return ""
    return text.strip().lower()


def collapse_whitespace(text: str) -> str:
    """
    여러 공백/줄바꿈을 하나의 공백으로 합치고 앞뒤 공백을 제거합니다.

    Args:
        text: 원본 텍스트

    Returns:
        정제된 텍스트
    """
    if not text:
        return text

    text = re.sub(r"\s+", " ", text)
    return text.strip()
