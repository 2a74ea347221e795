"""
Runtime settings read from CHARGES_RETURN_* environment variables.
"""
import os
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_LAYOUTS_DIR = PACKAGE_DIR / "parsing" / "layouts"


@dataclass
class Settings:
    storage_dir: Path = Path("data") / "reports"
    layouts_dir: Path = DEFAULT_LAYOUTS_DIR
    log_level: int = logging.INFO
    log_file: Optional[str] = "logs/app.log"
    branch_name: str = ""
    bgl_master_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        level_name = os.getenv('CHARGES_RETURN_LOG_LEVEL', 'INFO').upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO

        return cls(
            storage_dir=Path(os.getenv('CHARGES_RETURN_STORAGE_DIR', str(cls.storage_dir))),
            layouts_dir=Path(os.getenv('CHARGES_RETURN_LAYOUTS_DIR', str(DEFAULT_LAYOUTS_DIR))),
            log_level=level,
            # Empty string disables the file handler
            log_file=os.getenv('CHARGES_RETURN_LOG_FILE', cls.log_file) or None,
            branch_name=os.getenv('CHARGES_RETURN_BRANCH_NAME', ''),
            bgl_master_file=os.getenv('CHARGES_RETURN_BGL_MASTER') or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
