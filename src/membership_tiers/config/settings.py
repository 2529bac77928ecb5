"""
Centralized settings and path configuration for the membership tiers package.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


ENV_PREFIX = "MEMBERSHIP_TIERS_"


def get_project_root() -> Path:
    """Get the project root directory (pyproject.toml beside src/membership_tiers)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists() and (parent / 'src' / 'membership_tiers').is_dir():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Output files
    pricing_sheet: Path
    build_report: Path

    # Presentation
    currency: str = "USD"

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment overrides."""
        root = project_root or get_project_root()
        output_dir = root / 'src' / 'membership_tiers' / 'data' / 'outputs'

        return cls(
            project_root=root,
            pricing_sheet=output_dir / 'tier_pricing_sheet.csv',
            build_report=output_dir / 'build_report.json',
            currency=os.environ.get(f'{ENV_PREFIX}CURRENCY', 'USD').strip().upper(),
            api_host=os.environ.get(f'{ENV_PREFIX}API_HOST', '0.0.0.0'),
            api_port=int(os.environ.get(f'{ENV_PREFIX}API_PORT', '8000')),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
