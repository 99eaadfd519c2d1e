"""
Library-wide policy settings.

Settings are read once from the environment and can be replaced with
:func:`configure`.
"""
import os
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Tunable policy constants.

    Attributes:
        degrade_fraction: An integer interval result whose width is at least
            this fraction of the domain's range is returned as a bare int
        proof_cache_size: Maximum number of memoised proof obligations
    """
    degrade_fraction: float = 0.5
    proof_cache_size: int = 1024

    def __post_init__(self):
        if not 0.0 < self.degrade_fraction <= 1.0:
            raise ValueError(
                f"degrade_fraction must be in (0, 1], got {self.degrade_fraction}")
        if self.proof_cache_size < 1:
            raise ValueError(
                f"proof_cache_size must be positive, got {self.proof_cache_size}")


_settings: Optional[Settings] = None


def _from_env() -> Settings:
    env = os.environ.get("REFINERY_DEGRADE_FRACTION")
    if env:
        return Settings(degrade_fraction=float(env))
    return Settings()


def get_settings() -> Settings:
    """Return the active settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = _from_env()
    return _settings


def configure(**overrides) -> Settings:
    """Replace selected settings fields and return the new settings.

    Example:
        >>> configure(degrade_fraction=0.25)
    """
    global _settings
    _settings = replace(get_settings(), **overrides)
    return _settings


def reset_settings() -> None:
    """Drop the active settings so the next access re-reads the environment."""
    global _settings
    _settings = None
