"""Configuration loading for pursuit control.

This module provides Pydantic-based configuration loading from environment
variables and .env files. Values here seed each controller; per-controller
tunables are changed afterwards through ``PursuitController.configure_chase``.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class PursuitConfig(BaseSettings):
    """Configuration for pursuit controllers.

    Environment Variables:
        PATHCHASE_RECALC_INTERVAL: Minimum seconds between chase starts (default: 0.5)
        PATHCHASE_WAYPOINT_REACH_DISTANCE: Arrival distance (default: 4.0)
        PATHCHASE_TICK_INTERVAL: Seconds to sleep between cycles (default: 0.0)
        PATHCHASE_ROUTE_TIMEOUT: Timeout for one route computation (default: none)
        PATHCHASE_ROUTE_MAX_ATTEMPTS: Attempts per cycle on transient failure (default: 1)
        PATHCHASE_ROUTE_RETRY_INITIAL_WAIT: First retry delay in seconds (default: 0.05)
        PATHCHASE_ROUTE_RETRY_MAX_WAIT: Longest retry delay in seconds (default: 1.0)
        PATHCHASE_ROOT_PART_NAME: Part chased on player characters
        PATHCHASE_DEBUG: Draw debug markers by default (default: false)

    Example:
        >>> config = PursuitConfig()  # Loads from environment
        >>> config = PursuitConfig(tick_interval=1 / 60)
    """

    model_config = SettingsConfigDict(
        env_prefix="PATHCHASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Chase tunables
    recalc_interval: float = Field(
        default=0.5,
        gt=0,
        description="Minimum seconds between accepted chase starts",
    )
    waypoint_reach_distance: float = Field(
        default=4.0,
        gt=0,
        description="Planar distance that counts as arriving at a waypoint",
    )

    # Loop cadence
    tick_interval: float = Field(
        default=0.0,
        ge=0.0,
        le=10.0,
        description="Seconds to sleep at the end of each cycle (0 yields once)",
    )

    # Route computation
    route_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Timeout for a single route computation in seconds",
    )
    route_max_attempts: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per cycle when route computation fails transiently",
    )
    route_retry_initial_wait: float = Field(
        default=0.05,
        ge=0.0,
        le=10.0,
        description="Initial wait before the first retry (seconds)",
    )
    route_retry_max_wait: float = Field(
        default=1.0,
        ge=0.0,
        le=60.0,
        description="Maximum wait between retries (seconds)",
    )

    # Target resolution
    root_part_name: str = Field(
        default="RootPart",
        min_length=1,
        description="Name of the part chased on a player's character",
    )

    debug: bool = Field(default=False, description="Draw debug markers by default")

    @model_validator(mode="after")
    def check_retry_window(self) -> PursuitConfig:
        """Ensure the retry backoff window is ordered."""
        if self.route_retry_max_wait < self.route_retry_initial_wait:
            raise ValueError("route_retry_max_wait must be >= route_retry_initial_wait")
        return self

    def __repr__(self) -> str:
        return (
            f"PursuitConfig("
            f"recalc_interval={self.recalc_interval}s, "
            f"reach={self.waypoint_reach_distance}, "
            f"tick={self.tick_interval}s, "
            f"route_timeout={self.route_timeout}, "
            f"route_attempts={self.route_max_attempts}, "
            f"root_part={self.root_part_name!r}, "
            f"debug={self.debug}"
            f")"
        )


@lru_cache
def get_pursuit_config() -> PursuitConfig:
    """Get cached pursuit configuration singleton.

    Loads configuration once and caches it for subsequent calls.
    To reload configuration, call get_pursuit_config.cache_clear() first.

    Returns:
        PursuitConfig instance with settings from environment.
    """
    config = PursuitConfig()
    logger.info("Loaded pursuit configuration: %s", config)
    return config
