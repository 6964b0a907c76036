import pytest

from services.content_filter import OFFENSIVE_MATCH_THRESHOLDS, Sensitivity, count_offensive_matches, is_offensive


def test_counts_every_occurrence():
    assert count_offensive_matches("stupid, stupid, STUPID idea") == 3


def test_counts_across_terms():
    assert count_offensive_matches("this is so stupid and dumb") == 2


def test_matches_whole_words_only():
    # "hello" contains "hell", "classic" contains "ass", "sucks" is not "suck"
    assert count_offensive_matches("hello classic assistant, it sucks") == 0


def test_short_fragments_never_match():
    assert count_offensive_matches("hell") == 0
    assert count_offensive_matches("") == 0


def test_thresholds_are_preserved():
    assert OFFENSIVE_MATCH_THRESHOLDS == {Sensitivity.LOW: 2, Sensitivity.MEDIUM: 1, Sensitivity.HIGH: 1}


@pytest.mark.parametrize("sensitivity", [Sensitivity.LOW, Sensitivity.MEDIUM, Sensitivity.HIGH])
def test_two_matches_flag_at_every_sensitivity(sensitivity):
    assert is_offensive("this is so stupid and dumb", sensitivity)


def test_single_match_needs_medium_or_higher():
    text = "what a stupid idea that was"
    assert not is_offensive(text, Sensitivity.LOW)
    assert is_offensive(text, Sensitivity.MEDIUM)
    assert is_offensive(text, Sensitivity.HIGH)


def test_accepts_stored_integer_levels():
    assert is_offensive("what a stupid idea that was", 2)


def test_higher_sensitivity_is_never_less_strict():
    levels = sorted(Sensitivity)
    for lower, higher in zip(levels, levels[1:]):
        assert OFFENSIVE_MATCH_THRESHOLDS[higher] <= OFFENSIVE_MATCH_THRESHOLDS[lower]
