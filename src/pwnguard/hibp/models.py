"""
Data models for Pwned Passwords range checks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class CheckOutcome(str, Enum):
    """Result of a single breach check."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class HashParts:
    """SHA-1 digest split into the k-anonymity query key and local key."""

    prefix: str  # sent to the range API
    suffix: str  # never leaves this process

    @property
    def digest(self) -> str:
        return self.prefix + self.suffix


@dataclass
class PasswordCheckResult:
    """Result of checking a password against Pwned Passwords."""

    outcome: CheckOutcome = CheckOutcome.INDETERMINATE
    checked_at: datetime = field(default_factory=datetime.now)
    error: str | None = None
    # Never store the actual password!
    hash_prefix: str = ""  # Only first 5 chars of SHA-1

    @property
    def is_pwned(self) -> bool:
        """Check if password was found in breaches."""
        return self.outcome is CheckOutcome.FOUND

    @property
    def description(self) -> str:
        """Get human-readable description of the outcome."""
        descriptions = {
            CheckOutcome.FOUND: "This password has been found in known data breaches. Change it.",
            CheckOutcome.NOT_FOUND: "This password has not been found in any known data breaches.",
            CheckOutcome.INDETERMINATE: "The breach check could not be completed.",
        }
        return descriptions[self.outcome]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "outcome": self.outcome.value,
            "is_pwned": self.is_pwned,
            "description": self.description,
            "hash_prefix": self.hash_prefix,
            "checked_at": self.checked_at.isoformat(),
            "error": self.error,
        }


@dataclass(frozen=True)
class ScriptDescriptor:
    """Declarative description of the browser-side range check.

    The script-injection layer turns this into a routine that hashes the
    watched field on ``event``, fetches ``range_url + prefix`` and toggles
    the error element showing ``warning_text``. ``match_pattern`` is written
    in the subset shared by Python ``re`` and ECMAScript ``RegExp`` so both
    sides match the same lines.
    """

    field_selector: str
    error_selector: str
    warning_text: str
    range_url: str
    match_pattern: str
    match_flags: str = "i"
    prefix_length: int = 5
    event: str = "change"

    def pattern_for(self, suffix: str) -> str:
        """Materialize the match pattern for a digest suffix."""
        return self.match_pattern.replace("{suffix}", suffix)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "field_selector": self.field_selector,
            "error_selector": self.error_selector,
            "warning_text": self.warning_text,
            "range_url": self.range_url,
            "match_pattern": self.match_pattern,
            "match_flags": self.match_flags,
            "prefix_length": self.prefix_length,
            "event": self.event,
        }
