"""
Dubber 영어 → 터키어 텍스트 변환 모듈

번역 전 (영어):
1. 관용구 태깅: 관용구를 [[IDIOM:...]] 플레이스홀더로 감싸 번역기가 훼손하지 못하게 함
2. 축약형 확장: don't → do not (단방향 정규화, 되돌리지 않음)
3. 구동사 태깅: give up → [[PHRASAL:vazgeç]]

번역 후 (터키어):
1. 플레이스홀더 복원
2. 자주 나오는 오역 교정 (ayakda → ayakta)
3. 터키어 i/İ, ı/I 문자 보정
4. 문장 첫 글자 및 고유명사 대문자화
5. 구두점/접미사 공백 정리
6. 연속 중복 단어 제거

모든 변환은 부작용이 없으며, 빈 문자열이나 공백만 있는 입력은 그대로 반환합니다.
"""

import re
from typing import Callable, Optional

from dubber.modules.phrase_dictionary import PhraseDictionary
from dubber.utils.parsers import collapse_whitespace, to_two_letter_code


PLACEHOLDER_PATTERN = re.compile(
    r"\[\[\s*(IDIOM|PHRASAL)\s*:\s*(.*?)\s*\]\]",
    re.IGNORECASE
)

CONTRACTIONS: dict[str, str] = {
    "i'm": "I am",
    "i'll": "I will",
    "i've": "I have",
    "i'd": "I would",
    "you're": "you are",
    "you'll": "you will",
    "you've": "you have",
    "you'd": "you would",
    "he's": "he is",
    "he'll": "he will",
    "he'd": "he would",
    "she's": "she is",
    "she'll": "she will",
    "she'd": "she would",
    "we're": "we are",
    "we'll": "we will",
    "we've": "we have",
    "we'd": "we would",
    "they're": "they are",
    "they'll": "they will",
    "they've": "they have",
    "they'd": "they would",
    "it's": "it is",
    "it'll": "it will",
    "that's": "that is",
    "there's": "there is",
    "who's": "who is",
    "what's": "what is",
    "where's": "where is",
    "when's": "when is",
    "why's": "why is",
    "how's": "how is",
    "ain't": "is not",
    "aren't": "are not",
    "can't": "cannot",
    "couldn't": "could not",
    "didn't": "did not",
    "doesn't": "does not",
    "don't": "do not",
    "hadn't": "had not",
    "hasn't": "has not",
    "haven't": "have not",
    "isn't": "is not",
    "mightn't": "might not",
    "mustn't": "must not",
    "needn't": "need not",
    "shouldn't": "should not",
    "wasn't": "was not",
    "weren't": "were not",
    "won't": "will not",
    "wouldn't": "would not",
}

# 터키어에서 항상 대문자로 시작하는 고유명사 (지명, 요일, 월)
TURKISH_PROPER_NOUNS = (
    "türkiye", "türk", "istanbul", "ankara", "izmir", "antalya", "amerika", "avrupa",
    "asya", "afrika", "ingiltere", "almanya", "fransa", "japonya", "çin", "rusya",
    "pazartesi", "salı", "çarşamba", "perşembe", "cuma", "cumartesi", "pazar",
    "ocak", "şubat", "mart", "nisan", "mayıs", "haziran", "temmuz", "ağustos",
    "eylül", "ekim", "kasım", "aralık",
)

# 아포스트로피 뒤에 붙어야 하는 접미사 (예: Ankara'da)
TURKISH_APOSTROPHE_SUFFIXES = (
    "nın", "nin", "nun", "nün", "dan", "den", "tan", "ten", "dır", "dir",
    "yla", "yle", "lar", "ler", "ya", "ye", "yı", "yi", "yu", "yü",
    "da", "de", "ta", "te", "ın", "in", "un", "ün", "la", "le",
    "a", "e", "ı", "i", "u", "ü",
)

# 터키어의 정상적인 반복 표현 (중복 제거 대상 아님)
REDUPLICATION_EXCEPTIONS = frozenset({
    "yavaş", "ağır", "güzel", "tek", "bir", "sık", "kat", "adım", "damla",
    "ayrı", "ufak", "iri", "yan", "sıra",
})

# 번역기가 자주 내놓는 오역 교정
COMMON_TURKISH_FIXES: dict[str, str] = {
    "ayakda": "ayakta",
    "eğri": "eğer",
    "hiç kimse değil": "hiç kimse",
}

_WORD_PATTERN = re.compile(r"\w+")
_SENTENCE_START_PATTERN = re.compile(r"(^\s*|[.!?]\s+)([\"'“‘(\[]*)(\w)")
_REPEATED_WORD_PATTERN = re.compile(r"\b(\w+)(?:\s+\1\b)+", re.IGNORECASE)
_UPPER_LETTERS = "A-ZÇĞİÖŞÜ"


def turkish_upper(text: str) -> str:
    """터키어 규칙 대문자 변환 (i → İ, ı → I)"""
    return text.replace("i", "İ").replace("ı", "I").upper()


def turkish_lower(text: str) -> str:
    """터키어 규칙 소문자 변환 (I → ı, İ → i)"""
    return text.replace("I", "ı").replace("İ", "i").lower()


def _phrase_pattern(phrase: str) -> re.Pattern:
    """단어 경계 기준, 대소문자 무시, 공백/아포스트로피 변형 허용 패턴"""
    words = [re.escape(word).replace("'", "['’]") for word in phrase.split()]
    return re.compile(r"\b" + r"\s+".join(words) + r"\b", re.IGNORECASE)


def _outside_placeholders(text: str, transform: Callable[[str], str]) -> str:
    """플레이스홀더 밖의 텍스트에만 변환을 적용합니다."""
    parts = []
    last = 0
    for match in PLACEHOLDER_PATTERN.finditer(text):
        parts.append(transform(text[last:match.start()]))
        parts.append(match.group(0))
        last = match.end()
    parts.append(transform(text[last:]))
    return "".join(parts)


def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


class EnglishTurkishPipeline:
    """
    영어 → 터키어 전/후처리 파이프라인

    관용구/구동사 텍스트는 주입된 PhraseDictionary에서 가져옵니다.
    """

    SOURCE_LANGUAGE = "en"
    TARGET_LANGUAGE = "tr"

    def __init__(self, dictionary: Optional[PhraseDictionary] = None):
        self.dictionary = dictionary or PhraseDictionary()

        self._idiom_patterns = [
            (_phrase_pattern(idiom), idiom) for idiom, _ in self.dictionary.idioms()
        ]
        self._phrasal_patterns = [
            (_phrase_pattern(verb), rendering)
            for verb, rendering in self.dictionary.phrasal_verbs()
        ]
        self._contraction_patterns = [
            (_phrase_pattern(contraction), expansion)
            for contraction, expansion in sorted(
                CONTRACTIONS.items(), key=lambda item: len(item[0]), reverse=True
            )
        ]
        self._common_fix_patterns = [
            (_phrase_pattern(wrong), fixed) for wrong, fixed in COMMON_TURKISH_FIXES.items()
        ]
        self._proper_noun_patterns = [
            re.compile(rf"\b{re.escape(noun)}\b", re.IGNORECASE)
            for noun in TURKISH_PROPER_NOUNS
        ]
        suffixes = "|".join(TURKISH_APOSTROPHE_SUFFIXES)
        self._suffix_pattern = re.compile(rf"(?<=\w)\s*(['’])\s*({suffixes})\b")

    def applies_to(self, source_language: str, target_language: str) -> bool:
        """이 파이프라인이 담당하는 언어 쌍인지 확인합니다."""
        return (
            to_two_letter_code(source_language) == self.SOURCE_LANGUAGE
            and to_two_letter_code(target_language) == self.TARGET_LANGUAGE
        )

    # ==========================================
    # 번역 전처리 (영어)
    # ==========================================

    def tag_idioms(self, text: str) -> str:
        """관용구를 [[IDIOM:관용구]] 플레이스홀더로 바꿉니다."""
        if _is_blank(text):
            return text

        for pattern, idiom in self._idiom_patterns:
            text = _outside_placeholders(
                text,
                lambda chunk, p=pattern, key=idiom: p.sub(f"[[IDIOM:{key}]]", chunk)
            )
        return text

    def expand_contractions(self, text: str) -> str:
        """축약형을 풀어 씁니다 (첫 글자 대문자는 유지)."""
        if _is_blank(text):
            return text

        def expand(match: re.Match, expansion: str) -> str:
            if match.group(0)[0].isupper():
                return expansion[0].upper() + expansion[1:]
            return expansion

        for pattern, expansion in self._contraction_patterns:
            text = _outside_placeholders(
                text,
                lambda chunk, p=pattern, e=expansion: p.sub(lambda m: expand(m, e), chunk)
            )
        return text

    def tag_phrasal_verbs(self, text: str) -> str:
        """구동사를 의도한 터키어 표현을 담은 플레이스홀더로 바꿉니다."""
        if _is_blank(text):
            return text

        for pattern, rendering in self._phrasal_patterns:
            text = _outside_placeholders(
                text,
                lambda chunk, p=pattern, r=rendering: p.sub(f"[[PHRASAL:{r}]]", chunk)
            )
        return text

    def pre_process(self, text: str) -> str:
        """번역 전 전체 전처리"""
        if _is_blank(text):
            return text

        text = self.tag_idioms(text)
        text = self.expand_contractions(text)
        text = self.tag_phrasal_verbs(text)
        return text

    # ==========================================
    # 번역 후처리 (터키어)
    # ==========================================

    def resolve_placeholders(self, text: str, kinds: tuple[str, ...] = ("IDIOM", "PHRASAL")) -> str:
        """
        플레이스홀더를 터키어 표현으로 복원합니다.
        사전에 없는 관용구 키는 원문 그대로 남깁니다 (텍스트 누락 없음).

        Args:
            kinds: 복원할 플레이스홀더 종류 (나머지는 그대로 둠)
        """
        if _is_blank(text):
            return text

        def resolve(match: re.Match) -> str:
            kind = match.group(1).upper()
            value = match.group(2)
            if not value or kind not in kinds:
                return match.group(0)
            if kind == "IDIOM":
                return self.dictionary.idiom_for(value) or value
            return value

        return PLACEHOLDER_PATTERN.sub(resolve, text)

    def fix_common_errors(self, text: str) -> str:
        """번역기가 자주 틀리는 표현을 교정합니다 (첫 글자 대문자는 유지)."""
        if _is_blank(text):
            return text

        def fix(match: re.Match, fixed: str) -> str:
            if match.group(0)[0].isupper():
                return turkish_upper(fixed[0]) + fixed[1:]
            return fixed

        for pattern, fixed in self._common_fix_patterns:
            text = pattern.sub(lambda m, f=fixed: fix(m, f), text)
        return text

    def fix_i_letters(self, text: str) -> str:
        """
        터키어 i/İ, ı/I 보정

        - 전부 대문자인 단어 (i/ı 외 대문자가 하나 이상): 남아 있는 i/ı를 İ/I로
        - 그 외 단어: 첫 글자 이후의 I/İ를 ı/i로
        """
        if _is_blank(text):
            return text

        def fix_word(match: re.Match) -> str:
            word = match.group(0)
            letters = [c for c in word if c.isalpha()]
            if len(letters) < 2:
                return word

            rest = letters[1:]
            if (
                letters[0].isupper()
                and any(c.isupper() for c in rest)
                and all(c.isupper() or c in "iı" for c in rest)
            ):
                return turkish_upper(word)

            return word[0] + word[1:].replace("I", "ı").replace("İ", "i")

        return _WORD_PATTERN.sub(fix_word, text)

    def apply_capitalization(self, text: str) -> str:
        """문장 첫 글자와 고유명사를 터키어 규칙으로 대문자화합니다."""
        if _is_blank(text):
            return text

        text = _SENTENCE_START_PATTERN.sub(
            lambda m: m.group(1) + m.group(2) + turkish_upper(m.group(3)),
            text
        )

        for pattern in self._proper_noun_patterns:
            text = pattern.sub(lambda m: turkish_upper(m.group(0)[0]) + m.group(0)[1:], text)

        return text

    def fix_spacing(self, text: str) -> str:
        """구두점 앞 공백 제거, 문장부호 뒤 공백 보장, 아포스트로피 접미사 붙이기"""
        if _is_blank(text):
            return text

        text = re.sub(r"\s+([,.!?;:])", r"\1", text)
        text = re.sub(r"([,;])(?=[^\W\d_])", r"\1 ", text)
        text = re.sub(rf"([.!?])(?=[{_UPPER_LETTERS}])", r"\1 ", text)
        text = self._suffix_pattern.sub(r"\1\2", text)
        return collapse_whitespace(text)

    def remove_repeated_words(self, text: str) -> str:
        """번역기가 만든 연속 중복 단어를 제거합니다 (터키어 반복 표현 제외)."""
        if _is_blank(text):
            return text

        def dedupe(match: re.Match) -> str:
            word = match.group(1)
            if turkish_lower(word) in REDUPLICATION_EXCEPTIONS:
                return match.group(0)
            return word

        return _REPEATED_WORD_PATTERN.sub(dedupe, text)

    def post_process(self, text: str) -> str:
        """번역 후 전체 후처리"""
        if _is_blank(text):
            return text

        text = self.resolve_placeholders(text)
        text = self.fix_common_errors(text)
        text = self.fix_i_letters(text)
        text = self.apply_capitalization(text)
        text = self.fix_spacing(text)
        text = self.remove_repeated_words(text)
        return text

    # ==========================================
    # 오프라인 대체
    # ==========================================

    def substitute_idioms(self, text: str) -> str:
        """
        관용구를 터키어 표현으로 직접 치환합니다 (오프라인 대체용).
        구동사 플레이스홀더는 건드리지 않습니다.
        """
        if _is_blank(text):
            return text
        return self.resolve_placeholders(self.tag_idioms(text), kinds=("IDIOM",))
