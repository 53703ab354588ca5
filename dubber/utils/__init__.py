"""
Dubber 유틸리티 패키지
"""

from .parsers import (
    to_two_letter_code,
    normalize_phrase,
    collapse_whitespace,
)
from .exporters import (
    save_translation,
    load_translation,
)

__all__ = [
    "to_two_letter_code",
    "normalize_phrase",
    "collapse_whitespace",
    "save_translation",
    "load_translation",
]
