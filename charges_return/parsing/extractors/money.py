import re
from typing import Optional

# Optional minus, ASCII digits with optional comma grouping, optional 1-2 decimals
MONEY_PATTERN = re.compile(r"-?[0-9,]+(\.[0-9]{1,2})?")


def parse_money_token(token: Optional[str]) -> Optional[float]:
    """
    Parse a report amount token.

    Examples:
        "1,250.50" -> 1250.5
        "-300"     -> -300.0
        "12.345"   -> None (three decimals)
        "Rs.10"    -> None

    A token that is not an exact money value is treated as absent (None),
    never as an error.
    """
    t = str(token if token is not None else "").strip()
    if not t:
        return None
    if not MONEY_PATTERN.fullmatch(t):
        return None

    digits = t.replace(",", "")
    if not any(c.isdigit() for c in digits):
        return None
    return float(digits)
