"""
Line Classifier

Decides whether a report line is boilerplate (banners, column headers,
rules, certifications) to be dropped before amount extraction.

Errs toward "not noise": a data line wrongly dropped here is lost silently,
while a noise line wrongly kept is still rejected by amount extraction.
"""
from .config.layout import ReportLayout, DEFAULT_LAYOUT
from .text import normalize_spaces


def is_noise(line: str, layout: ReportLayout = DEFAULT_LAYOUT) -> bool:
    s = normalize_spaces(line).upper()
    if not s:
        return True

    if any(s.startswith(p) for p in layout.noise_prefixes):
        return True
    if any(p in s for p in layout.noise_phrases):
        return True

    # Only reached by lines no noise rule matched
    if any(p in s for p in layout.passthrough_phrases):
        return False

    return False
