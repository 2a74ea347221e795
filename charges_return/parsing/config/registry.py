"""
Layout Registry

Loads report layouts from JSON files and detects which one a report uses.
"""
import os
import json
from typing import Any, Dict, List, Optional
from dataclasses import asdict, fields
from charges_return.common.logging_config import get_logger
from .layout import ReportLayout, DEFAULT_LAYOUT

logger = get_logger(__name__)


class LayoutRegistry:
    """
    Registry for charges report layouts.

    Every .json file in the layouts directory holds one layout; keys missing
    from a file fall back to the ACM001 defaults.
    """

    def __init__(self, layouts_dir: str):
        """
        Args:
            layouts_dir: Path to directory containing .json layout files
        """
        self.layouts_dir = str(layouts_dir)
        self.layouts: List[ReportLayout] = []
        self._load_layouts()

    def _load_layouts(self) -> None:
        """Scans the directory and loads all .json layouts."""
        if not os.path.exists(self.layouts_dir):
            logger.warning(f"Layouts directory not found: {self.layouts_dir}")
            return

        for fname in sorted(os.listdir(self.layouts_dir)):
            if not fname.endswith(".json"):
                continue
            fpath = os.path.join(self.layouts_dir, fname)
            try:
                with open(fpath, 'r', encoding='utf-8') as f:
                    self.layouts.append(self._parse_layout(json.load(f)))
                logger.debug(f"Loaded layout: {fname}")
            except (OSError, ValueError, TypeError) as e:
                logger.error(f"Error loading layout {fname}: {e}", layout_file=fname)

    def _parse_layout(self, data: Dict[str, Any]) -> ReportLayout:
        """Converts dict to ReportLayout, ignoring unknown keys."""
        known = {f.name for f in fields(ReportLayout)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown layout keys: {sorted(unknown)}")
        return ReportLayout(**{k: v for k, v in data.items() if k in known})

    def detect(self, text: str) -> Optional[ReportLayout]:
        """
        Return the first layout whose keywords all occur in the text, or None.
        """
        for layout in self.layouts:
            if layout.identifies(text):
                logger.debug(f"Detected layout: {layout.name}")
                return layout
        return None

    def detect_or_default(self, text: str) -> ReportLayout:
        return self.detect(text) or DEFAULT_LAYOUT

    def get_by_name(self, name: str) -> Optional[ReportLayout]:
        for layout in self.layouts:
            if layout.name == name:
                return layout
        return None

    def list_layouts(self) -> List[str]:
        return [l.name for l in self.layouts]

    def save_layout(self, layout: ReportLayout, filename: str = None) -> str:
        """
        Write a layout to the registry directory and reload.

        Returns:
            Path of the written file
        """
        if not filename:
            safe_name = "".join(c for c in layout.name if c.isalnum() or c in (' ', '-', '_')).strip()
            filename = f"{safe_name.replace(' ', '_').lower() or 'layout'}.json"

        os.makedirs(self.layouts_dir, exist_ok=True)
        fpath = os.path.join(self.layouts_dir, filename)
        with open(fpath, 'w', encoding='utf-8') as f:
            json.dump(asdict(layout), f, indent=4, ensure_ascii=False)

        self.layouts = []
        self._load_layouts()

        logger.info(f"Saved layout to {fpath}", layout=layout.name)
        return fpath
