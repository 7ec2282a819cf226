"""
Centralized settings and path configuration for the quote tool.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_package_root() -> Path:
    """Get the quote_tool package directory (where data/ lives)."""
    return Path(__file__).resolve().parent.parent


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Installed as a wheel: fall back to the working directory
    return Path.cwd()


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Catalog source files
    steps_csv: Path
    options_csv: Path

    # Output files
    build_report: Path

    # Database
    database_url: str = "sqlite:///./quote_tool.db"

    # Email worker (notifications are skipped when either is missing)
    email_worker_url: Optional[str] = None
    email_worker_api_key: Optional[str] = None
    email_worker_timeout: float = 10.0

    # Runtime
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def notifications_enabled(self) -> bool:
        return bool(self.email_worker_url and self.email_worker_api_key)

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()
        data_dir = get_package_root() / 'data'

        return cls(
            project_root=root,
            steps_csv=Path(os.getenv('QUOTE_TOOL_STEPS_CSV', data_dir / 'steps.csv')),
            options_csv=Path(os.getenv('QUOTE_TOOL_OPTIONS_CSV', data_dir / 'options.csv')),
            build_report=root / 'outputs' / 'catalog_report.json',
            database_url=os.getenv('QUOTE_TOOL_DATABASE_URL', 'sqlite:///./quote_tool.db'),
            email_worker_url=os.getenv('EMAIL_WORKER_URL') or None,
            email_worker_api_key=os.getenv('EMAIL_WORKER_API_KEY') or None,
            email_worker_timeout=float(os.getenv('EMAIL_WORKER_TIMEOUT', '10')),
            environment=os.getenv('QUOTE_TOOL_ENV', 'development'),
            log_level=os.getenv('QUOTE_TOOL_LOG_LEVEL', 'INFO').upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
