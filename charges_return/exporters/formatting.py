from typing import Optional

DASH = "-"


def format_indian_currency(amount: Optional[float]) -> str:
    """
    Format an amount with Indian digit grouping: last three digits, then pairs.

    Examples:
        123456.5 -> "1,23,456.50"
        None     -> "0.00"
    """
    if amount is None:
        return "0.00"

    sign = "-" if amount < 0 else ""
    integer, decimal = f"{abs(amount):.2f}".split(".")

    last_three = integer[-3:]
    other = integer[:-3]
    groups = []
    while other:
        groups.insert(0, other[-2:])
        other = other[:-2]

    grouped = ",".join(groups + [last_three])
    return f"{sign}{grouped}.{decimal}"


def format_amount_or_dash(amount: Optional[float]) -> str:
    """Blank report columns render as a dash, not as zero."""
    return DASH if amount is None else format_indian_currency(amount)
