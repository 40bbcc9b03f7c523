"""
User-facing strings for the breach check.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from typing import Mapping

# Error code handed back to the password validator; hosts prefix it to
# build their own message key.
ERROR_CODE = "hibp"
WARNING_KEY = "profile_error_password_hibp"

DEFAULT_MESSAGES: dict[str, str] = {
    WARNING_KEY: (
        "This password has previously appeared in a data breach. "
        "Please choose a different password."
    ),
    "enableHibP": "Check passwords against the Have I Been Pwned database",
    "enableHibPjs": "Also check passwords in the browser while typing (requires the option above)",
}


class MessageCatalog:
    """Message lookup with host-supplied overrides over the defaults."""

    def __init__(self, overrides: Mapping[str, str] | None = None):
        self._messages = dict(DEFAULT_MESSAGES)
        if overrides:
            self._messages.update(overrides)

    def get(self, key: str, default: str | None = None) -> str:
        return self._messages.get(key, key if default is None else default)

    def __getitem__(self, key: str) -> str:
        return self._messages[key]

    def __contains__(self, key: object) -> bool:
        return key in self._messages

    @property
    def warning(self) -> str:
        """The breach warning shown next to the password field."""
        return self.get(WARNING_KEY)
