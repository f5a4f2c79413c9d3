"""Per-token feature functions for the POS tagger.

A feature function takes the surface texts of all tokens of one sentence and
the position of the token of interest, and returns a dict of named string
features. Functions are pure, so the same sentence always yields the same
features::

    >>> extract_features(["The", "3", "Cats"], DEFAULT_EXTRACTORS)[1]["numeric_type"]
    'NUMERIC'
"""
from typing import Callable, Dict, List, Sequence

Features = Dict[str, str]
FeatureFunction = Callable[[Sequence[str], int], Features]

ALL_UPPERCASE = "ALL_UPPERCASE"
ALL_LOWERCASE = "ALL_LOWERCASE"
INITIAL_UPPERCASE = "INITIAL_UPPERCASE"
MIXED_CASE = "MIXED_CASE"
NO_CASE = "NONE"

NUMERIC = "NUMERIC"
ALPHANUMERIC = "ALPHANUMERIC"
SOME_DIGITS = "SOME_DIGITS"
NON_NUMERIC = "NON_NUMERIC"


# SOURCE_MARKER_BEGIN_token_features
def covered_text(words: Sequence[str], index: int) -> Features:
    return {"text": words[index]}


def lower_case(words: Sequence[str], index: int) -> Features:
    return {"lower_case": words[index].lower()}


def capital_type(word: str) -> str:
    """Classify the casing of ``word``.

    Only cased letters count, so "U.S." is all uppercase and "3" has no case.
    """
    cased = [c for c in word if c.isupper() or c.islower()]
    if not cased:
        return NO_CASE
    if all(c.isupper() for c in cased):
        return ALL_UPPERCASE
    if all(c.islower() for c in cased):
        return ALL_LOWERCASE
    if cased[0].isupper() and all(c.islower() for c in cased[1:]):
        return INITIAL_UPPERCASE
    return MIXED_CASE


def numeric_type(word: str) -> str:
    if not any(c.isdigit() for c in word):
        return NON_NUMERIC
    if word.isdigit():
        return NUMERIC
    if any(c.isalpha() for c in word):
        return ALPHANUMERIC
    return SOME_DIGITS


def capital_type_feature(words: Sequence[str], index: int) -> Features:
    return {"capital_type": capital_type(words[index])}


def numeric_type_feature(words: Sequence[str], index: int) -> Features:
    return {"numeric_type": numeric_type(words[index])}


def suffix(n: int) -> FeatureFunction:
    """Right-aligned character n-gram; tokens shorter than ``n`` are kept whole."""
    if n <= 0:
        raise ValueError(f"Suffix length must be positive, got {n}.")

    def _suffix(words: Sequence[str], index: int) -> Features:
        return {f"suffix_{n}": words[index][-n:]}

    _suffix.__name__ = f"suffix_{n}"
    return _suffix


# SOURCE_MARKER_END_token_features


# SOURCE_MARKER_BEGIN_context_features
def context_window(preceding: int = 2, following: int = 2) -> FeatureFunction:
    """Texts of the neighbouring tokens inside the same sentence.

    Positions outside the sentence are skipped rather than padded, so tokens
    at the sentence edges get fewer features.
    """
    if preceding < 0 or following < 0:
        raise ValueError("Context window sizes cannot be negative.")

    def _context(words: Sequence[str], index: int) -> Features:
        features = {}
        for offset in range(1, preceding + 1):
            if index - offset >= 0:
                features[f"preceding_{offset}"] = words[index - offset]
        for offset in range(1, following + 1):
            if index + offset < len(words):
                features[f"following_{offset}"] = words[index + offset]
        return features

    return _context


# SOURCE_MARKER_END_context_features

DEFAULT_EXTRACTORS: List[FeatureFunction] = [
    covered_text,
    lower_case,
    capital_type_feature,
    numeric_type_feature,
    suffix(2),
    suffix(3),
    context_window(2, 2),
]


# sentences every extractor configuration is tried on before use
CHECK_SENTENCES: List[List[str]] = [
    ["The", "3", "Cats", "run", "."],
    ["Hi"],
]


def check_extractors(extractors: Sequence[FeatureFunction]) -> List[FeatureFunction]:
    """Validate an extractor configuration, returning it as a list.

    Every extractor is run on each token of `CHECK_SENTENCES`, so a function
    with the wrong signature, a non string feature or two extractors sharing a
    feature name is reported here instead of on the first real document.
    """
    if extractors is None:
        raise ValueError("No feature extractors given.")
    extractors = list(extractors)
    if not extractors:
        raise ValueError("At least one feature extractor is required.")
    for extractor in extractors:
        if not callable(extractor):
            raise ValueError(f"Feature extractor {extractor!r} is not callable.")

    for words in CHECK_SENTENCES:
        for index in range(len(words)):
            owners: Dict[str, FeatureFunction] = {}
            for extractor in extractors:
                try:
                    features = extractor(words, index)
                except Exception as e:
                    raise ValueError(
                        f"Feature extractor {extractor!r} failed on {words!r}: {e}"
                    ) from e
                if not isinstance(features, dict):
                    raise ValueError(
                        f"Feature extractor {extractor!r} returned "
                        f"{type(features).__name__}, not a dict."
                    )
                for name, value in features.items():
                    if not isinstance(name, str) or not isinstance(value, str):
                        raise ValueError(
                            f"Feature extractor {extractor!r} produced a non-string "
                            f"feature {name!r}: {value!r}."
                        )
                    if name in owners:
                        raise ValueError(
                            f"Feature [{name}] is produced by both {owners[name]!r} "
                            f"and {extractor!r}."
                        )
                    owners[name] = extractor
    return extractors


# SOURCE_MARKER_BEGIN_extract
def token_features(
    words: Sequence[str], index: int, extractors: Sequence[FeatureFunction]
) -> Features:
    features: Features = {}
    for extractor in extractors:
        for name, value in extractor(words, index).items():
            if name in features:
                raise ValueError(
                    f"Feature [{name}] produced twice for token {index} ({words[index]!r})."
                )
            features[name] = value
    return features


def extract_features(
    words: Sequence[str], extractors: Sequence[FeatureFunction]
) -> List[Features]:
    """One feature dict per word, in sentence order."""
    return [token_features(words, i, extractors) for i in range(len(words))]


# SOURCE_MARKER_END_extract
