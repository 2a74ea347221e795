"""
Report Layout Configuration

Defines the dataclass holding the textual rules used to read a charges abstract.
The defaults are the rules of the ACM001 Monthly Abstract of Charges.
"""
from dataclasses import dataclass, field
from typing import List

SUMMARY_PHRASES = [
    "TOTAL CHARGES FOR THE MONTH",
    "TOTAL CHARGES UPTO PREVIOUS MONTH",
    "BALANCE AS PER GENERAL LEDGER",
]


@dataclass
class ReportLayout:
    """
    Configuration for a charges report layout.

    Attributes:
        name: Human-readable layout name
        report_code: Code printed on the report banner (e.g. "ACM001")
        keywords: Strings that identify this layout in report text
        noise_prefixes: Normalised lines starting with any of these are boilerplate
        noise_phrases: Normalised lines containing any of these are boilerplate
        passthrough_phrases: Lines containing these are never noise
        excluded_head_prefixes: Heads dropped when summaries are excluded
        excluded_heads: Exact heads dropped when summaries are excluded
        summary_phrases: Ordered phrases marking summary rows; order is the sort order
    """
    name: str = "ACM001 - Monthly Abstract of Charges"
    report_code: str = "ACM001"
    keywords: List[str] = field(default_factory=lambda: ["MONTHLY ABSTRACT OF CHARGES"])

    noise_prefixes: List[str] = field(default_factory=lambda: [
        "ACM001", "BRANCH", "-----", "HEAD", "NOTE",
    ])
    noise_phrases: List[str] = field(default_factory=lambda: [
        "MONTHLY ABSTRACT OF CHARGES",
        "STATE BANK OF INDIA",
        "RUN DATE",
        "INDIAN RUPEE",
        "PARTICULAR OF ENCLOSURE",
        "REMARK",
        "I HEREBY CERTIFY",
    ])
    passthrough_phrases: List[str] = field(default_factory=lambda: ["END OF REPORT"])

    # Head inclusion filter
    excluded_head_prefixes: List[str] = field(default_factory=lambda: ["TOTAL CHARGES", "BALANCE AS PER"])
    excluded_heads: List[str] = field(default_factory=lambda: ["MISCELLANEOUS"])

    summary_phrases: List[str] = field(default_factory=lambda: list(SUMMARY_PHRASES))

    def identifies(self, text: str) -> bool:
        """True when every keyword occurs in the text (case-insensitive)."""
        upper = (text or "").upper()
        return all(k.upper() in upper for k in self.keywords)


DEFAULT_LAYOUT = ReportLayout()
