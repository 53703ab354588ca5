"""
Dubber 오프라인 구문 사전 모듈

원격 번역을 사용할 수 없을 때 사용하는 영어 → 터키어 고정 사전입니다.
- 자주 쓰는 짧은 구문 (인사, 숫자, 요일, 더빙 용어 등)
- 관용구 테이블 (플레이스홀더 치환에 사용)
- 구동사 테이블 (번역 전 표시용)
"""

from typing import Mapping, Optional

from dubber.utils.parsers import normalize_phrase


COMMON_PHRASES: dict[str, str] = {
    # 인사 및 기본 표현
    "hello": "Merhaba",
    "hi": "Selam",
    "good morning": "Günaydın",
    "good afternoon": "İyi günler",
    "good evening": "İyi akşamlar",
    "good night": "İyi geceler",
    "goodbye": "Hoşça kal",
    "bye": "Görüşürüz",
    "thank you": "Teşekkür ederim",
    "thanks": "Teşekkürler",
    "please": "Lütfen",
    "you're welcome": "Rica ederim",
    "excuse me": "Affedersiniz",
    "sorry": "Özür dilerim",
    "yes": "Evet",
    "no": "Hayır",
    "maybe": "Belki",

    # 자주 쓰는 질문
    "how are you": "Nasılsınız",
    "what is your name": "Adınız ne",
    "where are you from": "Nerelisiniz",
    "how old are you": "Kaç yaşındasınız",
    "do you speak english": "İngilizce biliyor musunuz",
    "do you speak turkish": "Türkçe biliyor musunuz",
    "where is the toilet": "Tuvalet nerede",
    "how much is this": "Bunun fiyatı ne kadar",
    "what time is it": "Saat kaç",

    # 자주 쓰는 대답
    "i don't understand": "Anlamıyorum",
    "i don't know": "Bilmiyorum",
    "i don't speak turkish": "Türkçe bilmiyorum",
    "my name is": "Benim adım",

    # 요일
    "monday": "Pazartesi",
    "tuesday": "Salı",
    "wednesday": "Çarşamba",
    "thursday": "Perşembe",
    "friday": "Cuma",
    "saturday": "Cumartesi",
    "sunday": "Pazar",

    # 월
    "january": "Ocak",
    "february": "Şubat",
    "march": "Mart",
    "april": "Nisan",
    "may": "Mayıs",
    "june": "Haziran",
    "july": "Temmuz",
    "august": "Ağustos",
    "september": "Eylül",
    "october": "Ekim",
    "november": "Kasım",
    "december": "Aralık",

    # 숫자
    "one": "Bir",
    "two": "İki",
    "three": "Üç",
    "four": "Dört",
    "five": "Beş",
    "six": "Altı",
    "seven": "Yedi",
    "eight": "Sekiz",
    "nine": "Dokuz",
    "ten": "On",

    # 시간
    "today": "Bugün",
    "tomorrow": "Yarın",
    "yesterday": "Dün",
    "now": "Şimdi",
    "later": "Sonra",
    "morning": "Sabah",
    "afternoon": "Öğleden sonra",
    "evening": "Akşam",
    "night": "Gece",

    # 장소
    "airport": "Havalimanı",
    "hotel": "Otel",
    "restaurant": "Restoran",
    "hospital": "Hastane",
    "pharmacy": "Eczane",
    "bank": "Banka",
    "shop": "Mağaza",
    "market": "Pazar",
    "city": "Şehir",
    "village": "Köy",
    "street": "Cadde",
    "road": "Yol",

    # 음식
    "breakfast": "Kahvaltı",
    "lunch": "Öğle yemeği",
    "dinner": "Akşam yemeği",
    "water": "Su",
    "tea": "Çay",
    "coffee": "Kahve",
    "bread": "Ekmek",

    # 날씨
    "hot": "Sıcak",
    "cold": "Soğuk",
    "warm": "Ilık",
    "sunny": "Güneşli",
    "rainy": "Yağmurlu",
    "rain": "Yağmur",
    "snow": "Kar",

    # 더빙 관련 용어
    "video": "Video",
    "audio": "Ses",
    "translate": "Çevir",
    "translation": "Çeviri",
    "subtitle": "Altyazı",
    "dubbing": "Dublaj",
    "voice": "Ses",
    "record": "Kayıt",
    "pause": "Duraklat",
    "play": "Oynat",
    "stop": "Durdur",

    # 상태/오류 메시지
    "error": "Hata",
    "warning": "Uyarı",
    "not found": "Bulunamadı",
    "disconnected": "Bağlantı kesildi",
    "try again": "Tekrar deneyin",
    "offline": "Çevrimdışı",
    "online": "Çevrimiçi",
    "loading": "Yükleniyor",
    "processing": "İşleniyor",
    "completed": "Tamamlandı",
    "failed": "Başarısız",
}


# 영어 관용구 → 터키어 대응 표현
IDIOMS: dict[str, str] = {
    "break a leg": "başarılar dilerim",
    "it's raining cats and dogs": "bardaktan boşanırcasına yağmur yağıyor",
    "piece of cake": "çocuk oyuncağı",
    "cost an arm and a leg": "göz kadar pahalı",
    "costs an arm and a leg": "göz kadar pahalı",
    "once in a blue moon": "kırk yılda bir",
    "under the weather": "keyifsiz",
    "speak of the devil": "iti an çomağı hazırla",
    "hit the road": "yola koyulmak",
    "break the ice": "buzları eritmek",
    "cut to the chase": "sadede gelmek",
    "beat around the bush": "lafı dolandırmak",
    "the best of both worlds": "hem nalına hem mıhına",
    "get your act together": "kendini toparlamak",
    "hang in there": "dayanmak",
    "go the extra mile": "fazladan çaba göstermek",
    "off the hook": "yırtmak",
    "on the ball": "işinin ehli",
    "rule of thumb": "altın kural",
    "no pain no gain": "emek olmadan yemek olmaz",
    "kill two birds with one stone": "bir taşla iki kuş vurmak",
    "in the same boat": "aynı gemide olmak",
    "bite the bullet": "acıya katlanmak",
    "a blessing in disguise": "hayırlısı olmuş",
    "hit the nail on the head": "tam üstüne basmak",
    "in hot water": "başı belada olmak",
    "give someone the cold shoulder": "yüz vermemek",
    "actions speak louder than words": "laf değil icraat önemli",
    "all ears": "kulak kesilmek",
    "barking up the wrong tree": "yanlış kapı çalmak",
    "by the skin of your teeth": "kıl payı",
    "get a taste of your own medicine": "kendi silahıyla vurulmak",
    "go down in flames": "çuvallamak",
    "pull yourself together": "kendine gelmek",
    "take a rain check": "başka bir zamana ertelemek",
    "the last straw": "bardağı taşıran son damla",
    "wild goose chase": "boş yere peşinden koşmak",
    "cross that bridge when you come to it": "o günün derdini o gün çekmek",
    "jump the gun": "erken davranmak",
    "out of the blue": "pat diye",
}


# 오역되기 쉬운 구동사 → 의도한 터키어 표현
PHRASAL_VERBS: dict[str, str] = {
    "look up": "araştır",
    "pass out": "bayıl",
    "give up": "vazgeç",
    "turn down": "reddet",
    "put off": "ertele",
    "take off": "çıkar",
    "run into": "karşılaş",
    "fill out": "doldur",
    "figure out": "anla",
    "break up": "ayrıl",
}


class PhraseDictionary:
    """
    오프라인 구문/관용구 사전

    모든 조회는 대소문자를 구분하지 않는 완전 일치입니다 (부분/유사 일치 없음).
    생성 후 내용이 바뀌지 않습니다.
    """

    def __init__(
        self,
        phrases: Optional[Mapping[str, str]] = None,
        idioms: Optional[Mapping[str, str]] = None,
        phrasal_verbs: Optional[Mapping[str, str]] = None
    ):
        """
        Args:
            phrases: 구문 사전 (기본값: COMMON_PHRASES)
            idioms: 관용구 사전 (기본값: IDIOMS)
            phrasal_verbs: 구동사 사전 (기본값: PHRASAL_VERBS)
        """
        self._phrases = self._normalized(COMMON_PHRASES if phrases is None else phrases)
        self._idioms = self._normalized(IDIOMS if idioms is None else idioms)
        self._phrasal_verbs = self._normalized(
            PHRASAL_VERBS if phrasal_verbs is None else phrasal_verbs
        )

    @staticmethod
    def _normalized(table: Mapping[str, str]) -> dict[str, str]:
        return {normalize_phrase(key): value for key, value in table.items()}

    def lookup(self, phrase: Optional[str]) -> Optional[str]:
        """구문 사전 조회 (없으면 None)"""
        key = normalize_phrase(phrase)
        if not key:
            return None
        return self._phrases.get(key)

    def idiom_for(self, phrase: Optional[str]) -> Optional[str]:
        """관용구 사전 조회 (없으면 None)"""
        key = normalize_phrase(phrase)
        if not key:
            return None
        return self._idioms.get(key)

    def idioms(self) -> list[tuple[str, str]]:
        """관용구 목록 (긴 것부터, 부분 치환 방지)"""
        return sorted(self._idioms.items(), key=lambda item: len(item[0]), reverse=True)

    def phrasal_verbs(self) -> list[tuple[str, str]]:
        """구동사 목록 (긴 것부터)"""
        return sorted(self._phrasal_verbs.items(), key=lambda item: len(item[0]), reverse=True)

    def __contains__(self, phrase: object) -> bool:
        return isinstance(phrase, str) and self.lookup(phrase) is not None

    def __len__(self) -> int:
        return len(self._phrases)
