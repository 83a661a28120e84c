"""Per-language vocabulary tables for the speech parser.

Patterns are regular-expression bodies without boundaries; the parser adds
non-letter boundary checks around them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from fridge_macros.domain.catalog import Unit


class Language(str, Enum):
    """Languages the speech parser understands."""

    RU = "ru"
    EN = "en"


@dataclass(frozen=True)
class UnitPattern:
    """A unit keyword and how it converts to a stored unit."""

    pattern: str
    unit: Unit
    multiplier: float = 1.0


@dataclass(frozen=True)
class SpeechVocabulary:
    """Language-specific words the parser strips, splits on or translates."""

    language: Language
    filler_words: tuple[str, ...]
    conjunctions: tuple[str, ...]
    number_words: Mapping[str, float]
    units: tuple[UnitPattern, ...]
    egg_pattern: str
    filler_stems: tuple[str, ...] = ()
    name_stopwords: tuple[str, ...] = ()
    aliases: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    # Fused forms such as "half-kilo" rewritten into separate number and unit words.
    compounds: tuple[tuple[str, str], ...] = field(default_factory=tuple)


ENGLISH = SpeechVocabulary(
    language=Language.EN,
    filler_words=(
        "i just",
        "i",
        "we",
        "ate",
        "eaten",
        "had",
        "have",
        "just",
        "for breakfast",
        "for lunch",
        "for dinner",
        "for a snack",
        "breakfast",
        "lunch",
        "dinner",
        "supper",
        "snack",
        "this morning",
        "this evening",
        "tonight",
        "today",
        "yesterday",
    ),
    conjunctions=("and", "then", "plus"),
    number_words={
        "a": 1,
        "an": 1,
        "one": 1,
        "two": 2,
        "three": 3,
        "four": 4,
        "five": 5,
        "six": 6,
        "seven": 7,
        "eight": 8,
        "nine": 9,
        "ten": 10,
        "half": 0.5,
    },
    units=(
        UnitPattern(r"kilograms?|kilogrammes?|kilos?|kgs?", Unit.GRAMS, 1000),
        UnitPattern(r"millilit(?:er|re)s?|mls?", Unit.MILLILITRES),
        UnitPattern(r"lit(?:er|re)s?|l", Unit.MILLILITRES, 1000),
        UnitPattern(r"grams?|grammes?|gr|g", Unit.GRAMS),
        UnitPattern(r"pieces?|pcs|pc|items?", Unit.PIECES),
    ),
    egg_pattern=r"eggs?",
    name_stopwords=("of", "a", "an", "the", "some", "with"),
)

RUSSIAN = SpeechVocabulary(
    language=Language.RU,
    filler_words=(
        "я",
        "мы",
        "мне",
        "меня",
        "ел",
        "ела",
        "ели",
        "на",
        "за",
        "в",
        "только что",
        "сейчас",
        "сегодня",
        "вчера",
        "утром",
        "днём",
        "днем",
        "вечером",
        "ночью",
    ),
    filler_stems=(
        "съел",
        "поел",
        "скушал",
        "покушал",
        "кушал",
        "выпил",
        "завтрак",
        "обед",
        "ужин",
        "перекус",
        "полдник",
    ),
    conjunctions=("и", "потом", "плюс", "а также", "ещё", "еще"),
    number_words={
        "один": 1,
        "одна": 1,
        "одно": 1,
        "одну": 1,
        "два": 2,
        "две": 2,
        "три": 3,
        "четыре": 4,
        "пять": 5,
        "шесть": 6,
        "семь": 7,
        "восемь": 8,
        "девять": 9,
        "десять": 10,
        "половина": 0.5,
        "половину": 0.5,
        "половинку": 0.5,
        "пол": 0.5,
        "полтора": 1.5,
        "полторы": 1.5,
    },
    units=(
        UnitPattern(r"килограмм\w*|кило|кг", Unit.GRAMS, 1000),
        UnitPattern(r"миллилитр\w*|мл", Unit.MILLILITRES),
        UnitPattern(r"литр\w*|л", Unit.MILLILITRES, 1000),
        UnitPattern(r"грамм\w*|грам\w*|гр|г", Unit.GRAMS),
        UnitPattern(r"штук\w*|шт|кусоч\w*|кус(?:ок|ка|ков)", Unit.PIECES),
    ),
    egg_pattern=r"яйц\w*|яиц\w*|яйко|яичк\w*",
    name_stopwords=("с", "со"),
    compounds=((r"пол-?(кило\w*|литр\w*)", r"пол \1"),),
    aliases=(
        (r"курин\w* грудк\w*|грудк\w* курин\w*", "chicken breast"),
        (r"куриц\w*|курочк\w*|курятин\w*|грудк\w*", "chicken breast"),
        (r"индейк\w*|индюшатин\w*", "turkey breast"),
        (r"бел\w* рис\w*|рис\w*", "rice white"),
        (r"яйц\w*|яиц\w*|яйко|яичк\w*", "eggs"),
        (r"брокколи", "broccoli"),
        (r"лосос\w*|сёмг\w*|семг\w*", "salmon"),
        (r"греческ\w* йогурт\w*|йогурт\w*", "greek yogurt"),
        (r"овсянк\w*|овсян\w* хлопь\w*|овс\w*", "oats"),
        (r"банан\w*", "banana"),
        (r"оливков\w* масл\w*|масл\w*", "olive oil"),
        (r"батат\w*|сладк\w* картофел\w*", "sweet potato"),
        (r"творог\w*|творож\w*", "cottage cheese"),
        (r"миндал\w*", "almonds"),
        (r"фарш\w*|говядин\w*", "ground beef"),
        (r"макарон\w*|паст\w*|спагетти", "pasta"),
        (r"помидор\w*|томат\w*", "tomatoes"),
        (r"авокадо", "avocado"),
        (r"молок\w*", "milk"),
        (r"хлеб\w*", "bread"),
        (r"шпинат\w*", "spinach"),
    ),
)

VOCABULARIES: dict[Language, SpeechVocabulary] = {
    Language.EN: ENGLISH,
    Language.RU: RUSSIAN,
}
