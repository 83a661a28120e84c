"""Turn a spoken meal description into product entries.

The parser is best effort: segments without a quantity or without a matching
product are dropped, and an empty result simply means nothing was recognized.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from fridge_macros.domain.catalog import Product, Unit
from fridge_macros.domain.speech import SpeechEntry
from fridge_macros.services.fuzzy import best_match
from fridge_macros.services.speech_vocabulary import (
    VOCABULARIES,
    Language,
    SpeechVocabulary,
)

_LETTERS = "a-zа-яё"
_DECIMAL_COMMA = re.compile(r"(\d),(\d)")
_PUNCTUATION = re.compile(r"\s*([,;])\s*")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CompiledUnit:
    pattern: re.Pattern[str]
    unit: Unit
    multiplier: float


@dataclass(frozen=True)
class _CompiledVocabulary:
    vocabulary: SpeechVocabulary
    fillers: tuple[re.Pattern[str], ...]
    separators: re.Pattern[str]
    leading_quantity: re.Pattern[str]
    quantity_unit_groups: re.Pattern[str]
    units: tuple[_CompiledUnit, ...]
    egg: re.Pattern[str]
    stopwords: re.Pattern[str] | None
    aliases: tuple[tuple[re.Pattern[str], str], ...]
    compounds: tuple[tuple[re.Pattern[str], str], ...]


def parse_speech_utterance(
    text: str, language: Language | str, products: Iterable[Product]
) -> list[SpeechEntry]:
    """Parse an utterance into ``(product, quantity, unit)`` entries."""
    compiled = _COMPILED[Language(language)]
    catalog = list(products)
    normalized = _split_compounds(_normalize(text), compiled)
    normalized = _strip_fillers(normalized, compiled)
    segments = _segments(normalized, compiled)
    entries = [
        entry
        for entry in (_parse_segment(segment, compiled, catalog) for segment in segments)
        if entry is not None
    ]
    _logger.info(
        "Speech parsed: language=%s segments=%s entries=%s",
        compiled.vocabulary.language.value,
        len(segments),
        len(entries),
    )
    return entries


def _normalize(text: str) -> str:
    lowered = _DECIMAL_COMMA.sub(r"\1.\2", text.lower())
    padded = _PUNCTUATION.sub(r" \1 ", lowered)
    return " ".join(padded.split())


def _split_compounds(text: str, compiled: _CompiledVocabulary) -> str:
    for pattern, replacement in compiled.compounds:
        text = pattern.sub(replacement, text)
    return text


def _strip_fillers(text: str, compiled: _CompiledVocabulary) -> str:
    for pattern in compiled.fillers:
        text = pattern.sub(" ", text)
    return " ".join(text.split())


def _segments(text: str, compiled: _CompiledVocabulary) -> list[str]:
    parts = [part.strip() for part in compiled.separators.split(text)]
    parts = [part for part in parts if part]
    if len(parts) > 1:
        return parts
    groups = [
        match.group(0).strip()
        for match in compiled.quantity_unit_groups.finditer(text)
    ]
    return groups or parts


def _parse_segment(
    segment: str, compiled: _CompiledVocabulary, products: list[Product]
) -> SpeechEntry | None:
    match = compiled.leading_quantity.match(segment)
    if match is None:
        return None
    quantity = _quantity_value(match.group("quantity"), compiled.vocabulary)
    rest = segment[match.end() :]

    unit: Unit | None = None
    multiplier = 1.0
    for candidate in compiled.units:
        unit_match = candidate.pattern.search(rest)
        if unit_match is None:
            continue
        unit = candidate.unit
        multiplier = candidate.multiplier
        rest = rest[: unit_match.start()] + " " + rest[unit_match.end() :]
        break
    if unit is None and compiled.egg.search(rest):
        unit = Unit.PIECES

    phrase = rest
    for pattern, replacement in compiled.aliases:
        phrase = pattern.sub(replacement, phrase)
    if compiled.stopwords is not None:
        phrase = compiled.stopwords.sub(" ", phrase)
    phrase = " ".join(phrase.split())
    if not phrase:
        return None

    product = best_match(products, phrase)
    if product is None:
        return None
    return SpeechEntry(
        product_id=product.id,
        quantity=quantity * multiplier,
        unit=unit or product.default_unit,
    )


def _quantity_value(token: str, vocabulary: SpeechVocabulary) -> float:
    if token in vocabulary.number_words:
        return float(vocabulary.number_words[token])
    return float(token)


def _word(body: str) -> str:
    return rf"(?<![{_LETTERS}])(?:{body})(?![{_LETTERS}])"


def _stem(body: str) -> str:
    return rf"(?<![{_LETTERS}]){body}[{_LETTERS}]*"


def _alternation(words: Iterable[str]) -> str:
    return "|".join(re.escape(word) for word in sorted(words, key=len, reverse=True))


def _compile(vocabulary: SpeechVocabulary) -> _CompiledVocabulary:
    number = (
        rf"\d+(?:\.\d+)?|(?:{_alternation(vocabulary.number_words)})"
        rf"(?![{_LETTERS}])"
    )
    unit_bodies = "|".join(unit.pattern for unit in vocabulary.units)
    pair = (
        rf"(?<![{_LETTERS}\d.])(?:{number})\s*"
        rf"(?:{unit_bodies}|{vocabulary.egg_pattern})(?![{_LETTERS}])"
    )
    fillers = tuple(
        re.compile(_word(re.escape(word)))
        for word in sorted(vocabulary.filler_words, key=len, reverse=True)
    ) + tuple(re.compile(_stem(re.escape(stem))) for stem in vocabulary.filler_stems)
    separators = re.compile(rf"\s*(?:[,;]|{_word(_alternation(vocabulary.conjunctions))})\s*")
    stopwords = (
        re.compile(_word(_alternation(vocabulary.name_stopwords)))
        if vocabulary.name_stopwords
        else None
    )
    return _CompiledVocabulary(
        vocabulary=vocabulary,
        fillers=fillers,
        separators=separators,
        leading_quantity=re.compile(rf"^(?P<quantity>{number})\s*"),
        quantity_unit_groups=re.compile(rf"{pair}.*?(?=\s*{pair}|$)"),
        units=tuple(
            _CompiledUnit(re.compile(_word(unit.pattern)), unit.unit, unit.multiplier)
            for unit in vocabulary.units
        ),
        egg=re.compile(_word(vocabulary.egg_pattern)),
        stopwords=stopwords,
        aliases=tuple(
            (re.compile(_word(pattern)), replacement)
            for pattern, replacement in vocabulary.aliases
        ),
        compounds=tuple(
            (re.compile(_word(pattern)), replacement)
            for pattern, replacement in vocabulary.compounds
        ),
    )


_COMPILED: dict[Language, _CompiledVocabulary] = {
    language: _compile(vocabulary) for language, vocabulary in VOCABULARIES.items()
}
