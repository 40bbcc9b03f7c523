"""
Configuration for Pwned Passwords checks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import os
from dataclasses import dataclass, replace
from typing import Any

DEFAULT_RANGE_URL = "https://api.pwnedpasswords.com/range/"
DEFAULT_TIMEOUT = 10.0

_TRUE_VALUES = ("true", "yes", "1", "on")


@dataclass(frozen=True)
class HIBPSettings:
    """Settings for the server-side check and the browser-side script."""

    # enableHibP
    server_check_enabled: bool = False
    # enableHibPjs, requires server_check_enabled
    client_check_enabled: bool = False

    range_url: str = DEFAULT_RANGE_URL
    timeout: float = DEFAULT_TIMEOUT  # seconds, whole request

    @classmethod
    def from_env(cls) -> "HIBPSettings":
        """Load configuration from environment variables."""
        timeout_str = os.environ.get("PWNGUARD_HIBP_TIMEOUT")
        try:
            timeout = float(timeout_str) if timeout_str else DEFAULT_TIMEOUT
        except ValueError:
            timeout = DEFAULT_TIMEOUT
        # aiohttp reads a total of 0 or less as "no timeout"
        if not timeout > 0:
            timeout = DEFAULT_TIMEOUT

        return cls(
            server_check_enabled=os.environ.get("PWNGUARD_HIBP_ENABLED", "").lower() in _TRUE_VALUES,
            client_check_enabled=os.environ.get("PWNGUARD_HIBP_JS_ENABLED", "").lower() in _TRUE_VALUES,
            range_url=os.environ.get("PWNGUARD_HIBP_RANGE_URL", DEFAULT_RANGE_URL),
            timeout=timeout,
        )

    def normalized(self) -> "HIBPSettings":
        """Apply the flag dependency: the script can't run without the server check."""
        if self.client_check_enabled and not self.server_check_enabled:
            return replace(self, server_check_enabled=True)
        return self

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if self.client_check_enabled and not self.server_check_enabled:
            errors.append("Client-side check requires the server-side check to be enabled")
        if self.timeout <= 0:
            errors.append("Timeout must be positive")
        if not self.range_url:
            errors.append("Range URL required")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "server_check_enabled": self.server_check_enabled,
            "client_check_enabled": self.client_check_enabled,
            "range_url": self.range_url,
            "timeout": self.timeout,
        }
