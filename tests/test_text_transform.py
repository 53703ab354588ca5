"""
Dubber 영어 → 터키어 전/후처리 테스트
text_transform.py의 변환 함수들을 테스트합니다.
"""

import sys
from pathlib import Path

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from dubber.modules.phrase_dictionary import PhraseDictionary
from dubber.modules.text_transform import (
    EnglishTurkishPipeline,
    turkish_lower,
    turkish_upper,
)


@pytest.fixture
def pipeline():
    return EnglishTurkishPipeline()


class TestTurkishCase:
    """터키어 대소문자 변환 테스트"""

    def test_upper(self):
        assert turkish_upper("istanbul") == "İSTANBUL"
        assert turkish_upper("ılık") == "ILIK"

    def test_lower(self):
        assert turkish_lower("İSTANBUL") == "istanbul"
        assert turkish_lower("ILIK") == "ılık"


class TestLanguagePair:
    """applies_to 테스트"""

    def test_english_turkish(self, pipeline):
        assert pipeline.applies_to("en", "tr")
        assert pipeline.applies_to("en-US", "tr-TR")
        assert pipeline.applies_to("EN", "TR")

    def test_other_pairs(self, pipeline):
        assert not pipeline.applies_to("tr", "en")
        assert not pipeline.applies_to("en", "de")


class TestPreProcessing:
    """번역 전처리 테스트"""

    def test_tag_idioms(self, pipeline):
        result = pipeline.tag_idioms("Good luck, break a leg!")
        assert result == "Good luck, [[IDIOM:break a leg]]!"

    def test_tag_idioms_case_insensitive(self, pipeline):
        result = pipeline.tag_idioms("It's Raining Cats And Dogs.")
        assert result == "[[IDIOM:it's raining cats and dogs]]."

    def test_tag_idioms_typographic_apostrophe(self, pipeline):
        result = pipeline.tag_idioms("It’s raining cats and dogs")
        assert result == "[[IDIOM:it's raining cats and dogs]]"

    def test_tag_idioms_word_boundaries(self, pipeline):
        """단어 중간은 매칭하지 않음"""
        assert pipeline.tag_idioms("unbreak a legend") == "unbreak a legend"

    def test_tag_idioms_is_idempotent(self, pipeline):
        once = pipeline.tag_idioms("That was a piece of cake.")
        assert pipeline.tag_idioms(once) == once

    def test_expand_contractions(self, pipeline):
        assert pipeline.expand_contractions("I don't know") == "I do not know"
        assert pipeline.expand_contractions("They're here") == "They are here"
        assert pipeline.expand_contractions("we can't stop") == "we cannot stop"

    def test_expand_contractions_preserves_initial_capital(self, pipeline):
        assert pipeline.expand_contractions("Don't go") == "Do not go"
        assert pipeline.expand_contractions("It's fine") == "It is fine"

    def test_contractions_inside_placeholder_untouched(self, pipeline):
        text = "[[IDIOM:it's raining cats and dogs]] and it's cold"
        result = pipeline.expand_contractions(text)
        assert result == "[[IDIOM:it's raining cats and dogs]] and it is cold"

    def test_tag_phrasal_verbs(self, pipeline):
        assert pipeline.tag_phrasal_verbs("Never give up") == "Never [[PHRASAL:vazgeç]]"
        assert pipeline.tag_phrasal_verbs("Look up the word") == "[[PHRASAL:araştır]] the word"

    def test_pre_process_order(self, pipeline):
        """관용구 → 축약형 → 구동사 순서"""
        result = pipeline.pre_process("It's raining cats and dogs, so don't give up.")
        assert result == "[[IDIOM:it's raining cats and dogs]], so do not [[PHRASAL:vazgeç]]."


class TestPostProcessing:
    """번역 후처리 테스트"""

    def test_resolve_idiom(self, pipeline):
        assert pipeline.resolve_placeholders("[[IDIOM:piece of cake]]") == "çocuk oyuncağı"

    def test_resolve_tolerates_mangled_brackets(self, pipeline):
        result = pipeline.resolve_placeholders("Bu [[ Idiom : Piece Of Cake ]] idi")
        assert result == "Bu çocuk oyuncağı idi"

    def test_resolve_phrasal(self, pipeline):
        assert pipeline.resolve_placeholders("Asla [[PHRASAL:vazgeç]]") == "Asla vazgeç"

    def test_unknown_idiom_keeps_literal_text(self, pipeline):
        """사전에 없는 키는 원문을 남김"""
        result = pipeline.resolve_placeholders("[[IDIOM:once bitten twice shy]]")
        assert result == "once bitten twice shy"

    def test_resolve_only_requested_kinds(self, pipeline):
        text = "[[IDIOM:break a leg]] ve [[PHRASAL:vazgeç]]"
        assert pipeline.resolve_placeholders(text, kinds=("IDIOM",)) == (
            "başarılar dilerim ve [[PHRASAL:vazgeç]]"
        )

    def test_fix_common_errors(self, pipeline):
        assert pipeline.fix_common_errors("bütün gün ayakda kaldım") == "bütün gün ayakta kaldım"
        assert pipeline.fix_common_errors("eğri gelirsen ara") == "eğer gelirsen ara"
        assert pipeline.fix_common_errors("orada hiç kimse değil vardı") == "orada hiç kimse vardı"

    def test_fix_common_errors_keeps_initial_capital(self, pipeline):
        assert pipeline.fix_common_errors("Eğri gelirsen ara") == "Eğer gelirsen ara"

    def test_fix_common_errors_whole_words_only(self, pipeline):
        assert pipeline.fix_common_errors("eğrisi") == "eğrisi"

    def test_post_process_fixes_common_errors(self, pipeline):
        assert pipeline.post_process("ayakda bekle .") == "Ayakta bekle."

    def test_fix_i_letters_upper_words(self, pipeline):
        assert pipeline.fix_i_letters("TÜRKiYE") == "TÜRKİYE"
        assert pipeline.fix_i_letters("KIRMIZı") == "KIRMIZI"

    def test_fix_i_letters_mixed_words(self, pipeline):
        assert pipeline.fix_i_letters("KİtaP") == "KitaP"
        assert pipeline.fix_i_letters("yapIyor") == "yapıyor"

    def test_fix_i_letters_leaves_short_and_lower_words(self, pipeline):
        assert pipeline.fix_i_letters("I am iyi") == "I am iyi"
        assert pipeline.fix_i_letters("iOS") == "iOS"

    def test_fix_i_letters_capitalized_short_words(self, pipeline):
        """대문자 + i/ı 로만 된 단어는 전부 대문자로 보지 않음"""
        assert pipeline.fix_i_letters("Hi") == "Hi"
        assert pipeline.fix_i_letters("Bi şey") == "Bi şey"
        assert pipeline.fix_i_letters("Hı") == "Hı"

    def test_sentence_capitalization(self, pipeline):
        result = pipeline.apply_capitalization("merhaba. iyi misin? evet!")
        assert result == "Merhaba. İyi misin? Evet!"

    def test_proper_nouns(self, pipeline):
        result = pipeline.apply_capitalization("Yarın istanbul ve ankara'ya gidiyoruz")
        assert result == "Yarın İstanbul ve Ankara'ya gidiyoruz"

    def test_fix_spacing_before_punctuation(self, pipeline):
        assert pipeline.fix_spacing("Merhaba , dünya !") == "Merhaba, dünya!"

    def test_fix_spacing_after_punctuation(self, pipeline):
        assert pipeline.fix_spacing("Evet,tabii.Sonra gel") == "Evet, tabii. Sonra gel"

    def test_fix_spacing_keeps_numbers(self, pipeline):
        assert pipeline.fix_spacing("Saat 10:30 ve fiyat 3.5") == "Saat 10:30 ve fiyat 3.5"

    def test_fix_spacing_attaches_suffix(self, pipeline):
        assert pipeline.fix_spacing("Ankara 'da kaldık") == "Ankara'da kaldık"
        assert pipeline.fix_spacing("İstanbul' un sokakları") == "İstanbul'un sokakları"

    def test_fix_spacing_collapses_whitespace(self, pipeline):
        assert pipeline.fix_spacing("  çok   güzel  ") == "çok güzel"

    def test_remove_repeated_words(self, pipeline):
        assert pipeline.remove_repeated_words("bu bu çok güzel") == "bu çok güzel"
        assert pipeline.remove_repeated_words("Merhaba merhaba dünya") == "Merhaba dünya"

    def test_keeps_turkish_reduplication(self, pipeline):
        assert pipeline.remove_repeated_words("yavaş yavaş git") == "yavaş yavaş git"

    def test_post_process_full(self, pipeline):
        raw = "[[IDIOM:it's raining cats and dogs]] , ve ve ankara 'da kaldık ."
        result = pipeline.post_process(raw)
        assert result == "Bardaktan boşanırcasına yağmur yağıyor, ve Ankara'da kaldık."

    def test_post_process_is_idempotent(self, pipeline):
        once = pipeline.post_process("merhaba , istanbul 'da  iyi  misin ?")
        assert pipeline.post_process(once) == once


class TestTotality:
    """모든 변환은 빈 입력을 그대로 반환"""

    @pytest.mark.parametrize("method", [
        "tag_idioms",
        "expand_contractions",
        "tag_phrasal_verbs",
        "pre_process",
        "resolve_placeholders",
        "fix_common_errors",
        "fix_i_letters",
        "apply_capitalization",
        "fix_spacing",
        "remove_repeated_words",
        "post_process",
        "substitute_idioms",
    ])
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_input_unchanged(self, pipeline, method, text):
        assert getattr(pipeline, method)(text) == text


class TestRoundTrip:
    """관용구/축약형/구동사가 없는 텍스트는 전/후처리 후 그대로"""

    @pytest.mark.parametrize("text", [
        "The weather is nice today. We will see you soon.",
        "This video explains the new features.",
        "Hello, my friend. Where are we going?",
    ])
    def test_round_trip(self, pipeline, text):
        assert pipeline.post_process(pipeline.pre_process(text)) == text


class TestSubstituteIdioms:
    """오프라인 관용구 치환 테스트"""

    def test_substitute(self, pipeline):
        assert pipeline.substitute_idioms("It's raining cats and dogs.") == (
            "bardaktan boşanırcasına yağmur yağıyor."
        )

    def test_phrasal_placeholder_left_alone(self, pipeline):
        """구동사 플레이스홀더는 치환하지 않음"""
        text = "I will [[PHRASAL:vazgeç]] tomorrow"
        assert pipeline.substitute_idioms(text) == text

    def test_no_idiom_unchanged(self, pipeline):
        assert pipeline.substitute_idioms("Nothing special here") == "Nothing special here"

    def test_custom_dictionary(self):
        dictionary = PhraseDictionary(phrases={}, idioms={"over the moon": "havalara uçmak"})
        pipeline = EnglishTurkishPipeline(dictionary)

        assert pipeline.substitute_idioms("She was over the moon") == "She was havalara uçmak"
