"""
Computation engine for performance amounts and volume credits
"""

from typing import Dict, Optional, Tuple
from loguru import logger

from .config import GenreRule, default_genre_rules
from .exceptions import UnknownPlayTypeError
from .models import Genre


class ComputationEngine:
    """
    Prices performances and computes volume credits from a genre rule table
    """

    def __init__(self, rules: Optional[Dict[Genre, GenreRule]] = None):
        """
        Initialize computation engine

        Args:
            rules: Rule per genre; defaults to the standard table
        """
        self.logger = logger
        self.rules = dict(rules) if rules is not None else default_genre_rules()

    def rule_for(self, play_type: str) -> Tuple[Genre, GenreRule]:
        """
        Resolve a play type to its genre and rule

        Raises:
            UnknownPlayTypeError: if the type is not a genre or has no rule
        """
        try:
            genre = Genre.parse(play_type)
            rule = self.rules.get(genre)
            if rule is None:
                raise UnknownPlayTypeError(genre.value)
        except UnknownPlayTypeError as e:
            self.logger.error(f"Cannot price play type '{e.play_type}'")
            raise
        return genre, rule

    def compute_amount(self, play_type: str, audience: int) -> int:
        """
        Compute the amount owed in cents for one performance

        Args:
            play_type: Genre string of the play
            audience: Number of seats

        Returns:
            Amount in cents
        """
        _, rule = self.rule_for(play_type)
        return _amount_for_rule(rule, audience)

    def compute_volume_credits(self, play_type: str, audience: int) -> int:
        """
        Compute volume credits earned by one performance

        Args:
            play_type: Genre string of the play
            audience: Number of seats

        Returns:
            Credits earned
        """
        _, rule = self.rule_for(play_type)
        return _credits_for_rule(rule, audience)

    def compute(self, play_type: str, audience: int) -> Tuple[Genre, int, int]:
        """Resolve the genre once and return (genre, amount, credits)"""
        genre, rule = self.rule_for(play_type)
        amount = _amount_for_rule(rule, audience)
        credits = _credits_for_rule(rule, audience)
        self.logger.debug(f"{genre.value} x {audience}: amount={amount} credits={credits}")
        return genre, amount, credits


def _amount_for_rule(rule: GenreRule, audience: int) -> int:
    amount = rule.base_amount
    if audience > rule.audience_threshold:
        amount += rule.over_capacity_amount
        amount += rule.over_capacity_per_person * (audience - rule.audience_threshold)
    amount += rule.amount_per_audience * audience
    return amount


def _credits_for_rule(rule: GenreRule, audience: int) -> int:
    credits = max(audience - rule.volume_credit_threshold, 0)
    if rule.extra_volume_factor:
        credits += audience // rule.extra_volume_factor
    return credits


_default_engine = ComputationEngine()


def amount_owed(genre: str, audience: int) -> int:
    """Amount in cents for a performance under the standard rules"""
    return _default_engine.compute_amount(genre, audience)


def volume_credits(genre: str, audience: int) -> int:
    """Volume credits for a performance under the standard rules"""
    return _default_engine.compute_volume_credits(genre, audience)
