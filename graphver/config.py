"""
graphver.config
===============
Scan tunables, passed explicitly to the scanner and locator.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from graphver.errors import ConfigError

logger = logging.getLogger(__name__)

MAVEN_VERSION_ANCHOR = "org.opentripplanner.common.MavenVersion"

ENV_MIN_STRING_LENGTH = "GRAPHVER_MIN_STRING_LENGTH"
ENV_ANCHOR            = "GRAPHVER_ANCHOR"


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for a single locate run."""
    min_string_length: int = 2      # runs must be strictly longer than this
    anchor:            str = MAVEN_VERSION_ANCHOR
    commit_length:     int = 40     # git SHA-1, hex

    def __post_init__(self) -> None:
        if self.min_string_length < 0:
            raise ValueError(f"min_string_length must be >= 0, got {self.min_string_length}")
        if self.commit_length < 1:
            raise ValueError(f"commit_length must be >= 1, got {self.commit_length}")
        if not self.anchor:
            raise ValueError("anchor must not be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ScanConfig":
        """
        Build a config from ``GRAPHVER_*`` environment variables, falling
        back to the defaults for anything unset.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        raw_len = env.get(ENV_MIN_STRING_LENGTH, "").strip()
        if raw_len:
            try:
                kwargs["min_string_length"] = int(raw_len)
            except ValueError as exc:
                raise ConfigError(
                    f"{ENV_MIN_STRING_LENGTH} must be an integer, got {raw_len!r}"
                ) from exc

        anchor = env.get(ENV_ANCHOR, "")
        if anchor:
            kwargs["anchor"] = anchor

        try:
            config = cls(**kwargs)  # type: ignore[arg-type]
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        logger.debug("Loaded %s", config)
        return config
