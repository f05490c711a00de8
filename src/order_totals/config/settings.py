"""
Centralized settings and path configuration for order totals.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "ORDER_TOTALS_"


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 4 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    value = _env(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}")


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path
    data_dir: Path
    output_dir: Path

    # Sample document export used by the UI and scripts
    sample_documents: Optional[Path] = None

    # Engine defaults
    include_line_level_calculations: bool = True
    cache_size: int = 128

    # Runtime
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()
        data_dir = Path(_env('DATA_DIR', str(root / 'data')))

        return cls(
            project_root=root,
            data_dir=data_dir,
            output_dir=data_dir / 'outputs',
            sample_documents=data_dir / 'sample_documents.csv',
            include_line_level_calculations=_env_bool('INCLUDE_LINE_LEVEL', True),
            cache_size=_env_int('CACHE_SIZE', 128),
            log_level=_env('LOG_LEVEL', 'INFO').upper(),
            api_host=_env('API_HOST', '0.0.0.0'),
            api_port=_env_int('API_PORT', 8000),
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
    """Forget the cached settings so the next get_settings() reloads."""
    global _settings
    _settings = None
