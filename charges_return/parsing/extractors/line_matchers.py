"""
Head/Amount Extractor

Report lines have no fixed columns, so amounts are anchored from the right:
a line is a free-text head followed by one or two trailing numeric tokens.
Each shape is a separate matcher; matchers are tried in order and the first
success wins.
"""
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from charges_return.common.models import ExtractedPair
from ..text import normalize_spaces
from .money import parse_money_token

# Loose numeric-looking token; strict validation happens in parse_money_token
TOKEN = r"-?[0-9,.]+"


class LineMatcher(ABC):
    """One line shape. Returns an ExtractedPair or None."""

    pattern: re.Pattern

    @abstractmethod
    def match(self, line: str) -> Optional[ExtractedPair]:
        pass


class TwoAmountMatcher(LineMatcher):
    """`<head> <month amount> <total till previous month>`"""

    pattern = re.compile(rf"^(?P<label>.+?)\s+(?P<first>{TOKEN})\s+(?P<second>{TOKEN})$")

    def match(self, line: str) -> Optional[ExtractedPair]:
        m = self.pattern.match(line)
        if not m:
            return None

        label = normalize_spaces(m.group('label'))
        first = parse_money_token(m.group('first'))
        second = parse_money_token(m.group('second'))
        if not label or (first is None and second is None):
            return None
        return ExtractedPair(label=label, primary_amount=first, secondary_amount=second)


class OneAmountMatcher(LineMatcher):
    """`<head> <amount>`"""

    pattern = re.compile(rf"^(?P<label>.+?)\s+(?P<amount>{TOKEN})$")

    def match(self, line: str) -> Optional[ExtractedPair]:
        m = self.pattern.match(line)
        if not m:
            return None

        label = normalize_spaces(m.group('label'))
        amount = parse_money_token(m.group('amount'))
        if not label or amount is None:
            return None
        return ExtractedPair(label=label, primary_amount=amount)


DEFAULT_MATCHERS: List[LineMatcher] = [TwoAmountMatcher(), OneAmountMatcher()]


def extract_pair(line: str, matchers: Sequence[LineMatcher] = DEFAULT_MATCHERS) -> Optional[ExtractedPair]:
    """
    Split a non-noise line into head and amounts.

    Example:
        "Rent 1,250.50 3,000" -> ExtractedPair("Rent", 1250.5, 3000.0)
    """
    normalized = normalize_spaces(line)
    if not normalized:
        return None

    for matcher in matchers:
        pair = matcher.match(normalized)
        if pair is not None:
            return pair
    return None
