"""Fuzzy product-name matching tolerant to gaps and typos."""

import re
from collections.abc import Iterable

from fridge_macros.domain.catalog import Product
from fridge_macros.services.macros import round_half_up

_NAME_TOKEN_SPLIT = re.compile(r"[\W_]+")


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between two strings."""
    if not a:
        return len(b)
    if not b:
        return len(a)
    row = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        previous = row[0]
        row[0] = i
        for j, char_b in enumerate(b, start=1):
            current = row[j]
            cost = 0 if char_a == char_b else 1
            row[j] = min(row[j] + 1, row[j - 1] + 1, previous + cost)
            previous = current
    return row[len(b)]


def fuzzy_score(name: str, query: str) -> int:
    """Score how well ``query`` matches a product name; 0 means no match.

    Each query token scores as a substring or, failing that, as a subsequence
    of the name. A token that is neither zeroes the whole query. Tokens close to
    a name token by edit distance earn a separate typo bonus.
    """
    normalized = name.lower()
    cleaned = query.lower().strip()
    if not cleaned:
        return 1

    tokens = cleaned.split()
    name_tokens = [token for token in _NAME_TOKEN_SPLIT.split(normalized) if token]
    total = 0

    for token in tokens:
        index = normalized.find(token)
        if index >= 0:
            coverage = int(round_half_up(len(token) / len(normalized) * 20))
            total += 100 - index + min(20, coverage)
            continue
        density = _subsequence_density(normalized, token)
        if density is None:
            return 0
        total += 50 + int(round_half_up(density * 20))

    for token in tokens:
        tolerance = min(2, max(1, len(token) // 4))
        best = min(
            (levenshtein(token, name_token) for name_token in name_tokens),
            default=None,
        )
        if best is not None and best <= tolerance:
            total += 30 + (tolerance - best) * 5

    return total


def rank_products(products: Iterable[Product], query: str) -> list[Product]:
    """Return matching products, best score first, ties by name."""
    scored = [(fuzzy_score(product.name, query), product) for product in products]
    matches = [(score, product) for score, product in scored if score > 0]
    matches.sort(key=lambda entry: (-entry[0], entry[1].name.casefold()))
    return [product for _, product in matches]


def best_match(products: Iterable[Product], query: str) -> Product | None:
    """Return the best matching product, if any."""
    ranked = rank_products(products, query)
    return ranked[0] if ranked else None


def _subsequence_density(name: str, token: str) -> float | None:
    name_index = 0
    token_index = 0
    gaps = 0
    while name_index < len(name) and token_index < len(token):
        if name[name_index] == token[token_index]:
            token_index += 1
        else:
            gaps += 1
        name_index += 1
    if token_index != len(token):
        return None
    return len(token) / (len(token) + gaps)
