# Configuration submodule
from .layout import ReportLayout, DEFAULT_LAYOUT, SUMMARY_PHRASES
from .registry import LayoutRegistry

__all__ = ['ReportLayout', 'DEFAULT_LAYOUT', 'SUMMARY_PHRASES', 'LayoutRegistry']
