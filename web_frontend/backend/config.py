"""
Backend Configuration.
"""

import os
from dataclasses import dataclass, fields
from typing import Optional

from doe_studio.core.tolerance import PIXEL_CEILING


@dataclass
class AppConfig:
    """Application configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Engine limits
    pixel_ceiling: int = PIXEL_CEILING

    # Task management
    max_concurrent_tasks: int = 2
    optimize_timeout_seconds: float = 60.0  # Fail the optimize task after this long
    task_cleanup_seconds: int = 86400  # Clean up finished tasks after 24 hours

    # Mock optimizer
    mock_duration_seconds: float = 2.5
    mock_seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ=None) -> 'AppConfig':
        """Build a config with ``DOE_STUDIO_*`` environment overrides.

        Recognized: DOE_STUDIO_HOST, DOE_STUDIO_PORT,
        DOE_STUDIO_OPTIMIZE_TIMEOUT, DOE_STUDIO_MOCK_SECONDS,
        DOE_STUDIO_MOCK_SEED.

        Raises:
            ValueError: If a numeric override cannot be parsed
        """
        environ = os.environ if environ is None else environ
        overrides = {
            'host': ('DOE_STUDIO_HOST', str),
            'port': ('DOE_STUDIO_PORT', int),
            'optimize_timeout_seconds': ('DOE_STUDIO_OPTIMIZE_TIMEOUT', float),
            'mock_duration_seconds': ('DOE_STUDIO_MOCK_SECONDS', float),
            'mock_seed': ('DOE_STUDIO_MOCK_SEED', int),
        }
        values = {}
        for name, (env_name, cast) in overrides.items():
            raw = environ.get(env_name)
            if raw not in (None, ''):
                values[name] = cast(raw)
        return cls(**values)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Global config instance
config = AppConfig.from_env()
