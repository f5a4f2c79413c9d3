import pytest

from pos_tutorial import features
from pos_tutorial.features import (
    DEFAULT_EXTRACTORS,
    check_extractors,
    context_window,
    extract_features,
    suffix,
)

WORDS = ["The", "3", "Cats", "run", "."]


def test_one_feature_set_per_word_in_order():
    extracted = extract_features(WORDS, DEFAULT_EXTRACTORS)

    assert len(extracted) == len(WORDS)
    assert [f["text"] for f in extracted] == WORDS


@pytest.mark.parametrize("word", ["The", "NASA", "iPhone", "", "Ünïcode", "3"])
def test_lower_case_matches_text(word):
    extracted = extract_features([word], DEFAULT_EXTRACTORS)[0]
    assert extracted["lower_case"] == extracted["text"].lower()


def test_capital_and_numeric_types():
    extracted = extract_features(WORDS, DEFAULT_EXTRACTORS)

    assert [f["capital_type"] for f in extracted] == [
        features.INITIAL_UPPERCASE,
        features.NO_CASE,
        features.INITIAL_UPPERCASE,
        features.ALL_LOWERCASE,
        features.NO_CASE,
    ]
    assert [f["numeric_type"] for f in extracted] == [
        features.NON_NUMERIC,
        features.NUMERIC,
        features.NON_NUMERIC,
        features.NON_NUMERIC,
        features.NON_NUMERIC,
    ]


@pytest.mark.parametrize(
    "word, expected",
    [
        ("U.S.", features.ALL_UPPERCASE),
        ("McDonald", features.MIXED_CASE),
        ("I", features.ALL_UPPERCASE),
        ("--", features.NO_CASE),
    ],
)
def test_capital_type(word, expected):
    assert features.capital_type(word) == expected


@pytest.mark.parametrize(
    "word, expected",
    [
        ("1987", features.NUMERIC),
        ("F-16", features.ALPHANUMERIC),
        ("3.5", features.SOME_DIGITS),
        ("1,000", features.SOME_DIGITS),
        ("", features.NON_NUMERIC),
    ],
)
def test_numeric_type(word, expected):
    assert features.numeric_type(word) == expected


def test_suffixes():
    extracted = extract_features(["running", "go", "a", ""], DEFAULT_EXTRACTORS)

    assert [f["suffix_2"] for f in extracted] == ["ng", "go", "a", ""]
    assert [f["suffix_3"] for f in extracted] == ["ing", "go", "a", ""]


def test_suffix_length_must_be_positive():
    with pytest.raises(ValueError):
        suffix(0)


def test_context_stays_inside_the_sentence():
    extracted = extract_features(WORDS, [context_window(2, 2)])

    assert extracted[0] == {"following_1": "3", "following_2": "Cats"}
    assert extracted[1] == {"preceding_1": "The", "following_1": "Cats", "following_2": "run"}
    assert extracted[2] == {
        "preceding_1": "3",
        "preceding_2": "The",
        "following_1": "run",
        "following_2": ".",
    }
    assert extracted[4] == {"preceding_1": "run", "preceding_2": "Cats"}


def test_single_word_sentence_has_no_context():
    assert extract_features(["Hi"], [context_window()]) == [{}]


def test_empty_sentence():
    assert extract_features([], DEFAULT_EXTRACTORS) == []


def test_duplicate_feature_names_are_rejected():
    with pytest.raises(ValueError, match="text"):
        extract_features(WORDS, [features.covered_text, features.covered_text])


def test_extractors_are_combined_in_order():
    def shout(words, index):
        return {"shout": words[index].upper()}

    extracted = extract_features(["hey"], [features.covered_text, shout])
    assert list(extracted[0].items()) == [("text", "hey"), ("shout", "HEY")]


@pytest.mark.parametrize("extractors", [None, [], [features.covered_text, "lower_case"]])
def test_check_extractors_rejects_bad_configuration(extractors):
    with pytest.raises(ValueError):
        check_extractors(extractors)


def test_check_extractors_returns_list():
    assert check_extractors(tuple(DEFAULT_EXTRACTORS)) == DEFAULT_EXTRACTORS


def test_check_extractors_names_the_colliding_feature():
    with pytest.raises(ValueError, match="following_1"):
        check_extractors([context_window(2, 2), context_window(1, 1)])


def test_check_extractors_reports_failing_extractor():
    with pytest.raises(ValueError) as info:
        check_extractors([str.lower])
    assert isinstance(info.value.__cause__, TypeError)


def test_check_extractors_accepts_disjoint_windows():
    extractors = [features.covered_text, context_window(1, 0), suffix(2)]
    assert check_extractors(extractors) == extractors
