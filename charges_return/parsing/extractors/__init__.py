# Extractors
from .money import parse_money_token
from .line_matchers import LineMatcher, TwoAmountMatcher, OneAmountMatcher, extract_pair

__all__ = ['parse_money_token', 'LineMatcher', 'TwoAmountMatcher', 'OneAmountMatcher', 'extract_pair']
