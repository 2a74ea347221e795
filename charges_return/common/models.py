from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

MISSING_DATE_LABEL = "—"


@dataclass
class ExtractedPair:
    """
    A charge head and the trailing amounts found on its report line.
    At least one of the two amounts is set.
    """
    label: str
    primary_amount: Optional[float] = None    # Amount for the month
    secondary_amount: Optional[float] = None  # Total till end of previous month


@dataclass
class ChargeRow:
    """
    One line item of the abstract. None amounts mean the column was blank
    in the report and must stay distinguishable from 0.
    """
    label: str
    month_amount: Optional[float]
    prior_total: Optional[float]
    as_on_total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'label': self.label,
            'month_amount': self.month_amount,
            'prior_total': self.prior_total,
            'as_on_total': self.as_on_total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChargeRow":
        month = data.get('month_amount')
        prior = data.get('prior_total')
        as_on = data.get('as_on_total')
        if as_on is None:
            as_on = (month or 0) + (prior or 0)
        return cls(label=data['label'], month_amount=month, prior_total=prior, as_on_total=as_on)


@dataclass
class ReportDate:
    """The 'AS AT' stamp of a report: ISO date plus a display label."""
    iso: str
    label: str

    @classmethod
    def missing(cls) -> "ReportDate":
        return cls(iso="", label=MISSING_DATE_LABEL)

    @property
    def is_valid(self) -> bool:
        return bool(self.iso)

    def to_dict(self) -> Dict[str, str]:
        return {'iso': self.iso, 'label': self.label}


@dataclass
class ParseResult:
    """
    Output of a single parse: the report date and the presentation-ordered rows.
    Owned by the caller; the parser keeps no reference to it.
    """
    report_date: ReportDate
    rows: List[ChargeRow] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            'report_date': self.report_date.to_dict(),
            'rows': [r.to_dict() for r in self.rows],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParseResult":
        date_data = data.get('report_date') or {}
        report_date = ReportDate(
            iso=date_data.get('iso', ''),
            label=date_data.get('label', MISSING_DATE_LABEL),
        )
        return cls(report_date=report_date, rows=[ChargeRow.from_dict(r) for r in data.get('rows', [])])
