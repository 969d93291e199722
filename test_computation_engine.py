"""
Tests for genre pricing and volume credits
"""

import pytest

from theater_billing.computation_engine import ComputationEngine, amount_owed, volume_credits
from theater_billing.config import GenreRule, default_genre_rules
from theater_billing.exceptions import UnknownPlayTypeError, UnrecognizedPlayGenreError
from theater_billing.models import Genre


def test_tragedy_amount():
    assert amount_owed("tragedy", 0) == 40000
    assert amount_owed("tragedy", 30) == 40000
    assert amount_owed("tragedy", 31) == 41000
    assert amount_owed("tragedy", 55) == 65000


def test_comedy_amount_at_threshold_has_no_surcharge():
    # base + 300 per audience member, no flat overage at exactly 20
    assert amount_owed("comedy", 20) == 30000 + 300 * 20


def test_comedy_amount_above_threshold():
    assert amount_owed("comedy", 21) == 30000 + 10000 + 500 + 300 * 21
    assert amount_owed("comedy", 35) == 58000


def test_history_amount():
    assert amount_owed("history", 20) == 20000
    assert amount_owed("history", 25) == 25000


def test_pastoral_amount():
    assert amount_owed("pastoral", 20) == 40000
    assert amount_owed("pastoral", 30) == 65000


@pytest.mark.parametrize("genre,threshold,base", [
    ("tragedy", 30, 40000),
    ("history", 20, 20000),
    ("pastoral", 20, 40000),
])
def test_flat_base_up_to_threshold(genre, threshold, base):
    for audience in range(threshold + 1):
        assert amount_owed(genre, audience) == base


def test_comedy_base_up_to_threshold_includes_per_audience_term():
    for audience in range(21):
        assert amount_owed("comedy", audience) == 30000 + 300 * audience


def test_volume_credits_per_genre():
    assert volume_credits("tragedy", 55) == 25
    assert volume_credits("tragedy", 10) == 0
    assert volume_credits("comedy", 20) == 1
    assert volume_credits("comedy", 35) == 5 + 1
    assert volume_credits("history", 25) == 5
    assert volume_credits("history", 20) == 0
    assert volume_credits("pastoral", 20) == 10
    assert volume_credits("pastoral", 31) == 11 + 15


@pytest.mark.parametrize("genre", [genre.value for genre in Genre])
def test_amount_and_credits_are_monotonic(genre):
    previous_amount = amount_owed(genre, 0)
    previous_credits = volume_credits(genre, 0)
    for audience in range(1, 150):
        amount = amount_owed(genre, audience)
        credits = volume_credits(genre, audience)
        assert amount >= previous_amount
        assert credits >= previous_credits
        previous_amount, previous_credits = amount, credits


def test_unknown_type_fails_for_amount_and_credits():
    with pytest.raises(UnknownPlayTypeError) as excinfo:
        amount_owed("musical", 10)
    assert excinfo.value.play_type == "musical"
    assert "musical" in str(excinfo.value)

    with pytest.raises(UnrecognizedPlayGenreError):
        volume_credits("musical", 10)


def test_compute_returns_genre_amount_and_credits():
    engine = ComputationEngine()
    assert engine.compute("comedy", 20) == (Genre.COMEDY, 36000, 1)


def test_custom_rule_table():
    rules = default_genre_rules()
    rules[Genre.HISTORY] = GenreRule(
        base_amount=100,
        audience_threshold=1,
        over_capacity_per_person=10,
        volume_credit_threshold=0,
        extra_volume_factor=3,
    )
    engine = ComputationEngine(rules)
    assert engine.compute_amount("history", 4) == 130
    assert engine.compute_volume_credits("history", 4) == 4 + 1
    # other genres keep the standard rules
    assert engine.compute_amount("tragedy", 55) == 65000


def test_genre_without_rule_is_unknown():
    rules = default_genre_rules()
    del rules[Genre.PASTORAL]
    engine = ComputationEngine(rules)
    with pytest.raises(UnknownPlayTypeError) as excinfo:
        engine.compute("pastoral", 10)
    assert excinfo.value.play_type == "pastoral"
