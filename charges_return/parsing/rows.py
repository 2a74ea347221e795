from charges_return.common.models import ChargeRow, ExtractedPair


def finalize(pair: ExtractedPair) -> ChargeRow:
    """Turn an extracted pair into a row; blank amounts count as 0 in the as-on total."""
    month = pair.primary_amount if pair.primary_amount is not None else 0
    prev = pair.secondary_amount if pair.secondary_amount is not None else 0
    return ChargeRow(
        label=pair.label,
        month_amount=pair.primary_amount,
        prior_total=pair.secondary_amount,
        as_on_total=month + prev,
    )
