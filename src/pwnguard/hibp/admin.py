"""
Settings-admin helpers for the two breach-check flags.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

SECTION_BREAK = ""

# Password settings block the flags are listed after.
DEFAULT_ANCHOR = "enable_password_conversion"

SERVER_FLAG = "enableHibP"
CLIENT_FLAG = "enableHibPjs"


@dataclass(frozen=True)
class ConfigVar:
    """A single admin setting entry."""

    kind: str
    name: str


HIBP_CONFIG_VARS: tuple[ConfigVar, ...] = (
    ConfigVar("check", SERVER_FLAG),
    ConfigVar("check", CLIENT_FLAG),
)

ConfigEntry = ConfigVar | str


def insert_config_vars(
    config_vars: Sequence[ConfigEntry],
    new_vars: Sequence[ConfigVar] = HIBP_CONFIG_VARS,
    after: str = DEFAULT_ANCHOR,
) -> list[ConfigEntry]:
    """Return a copy of ``config_vars`` with ``new_vars`` in their own section.

    The section goes right after the setting named ``after`` and the section
    break that follows it, if any. If there is no such setting the section
    is appended at the end.
    """
    entries = list(config_vars)
    section: list[ConfigEntry] = [SECTION_BREAK, *new_vars]

    index = next(
        (i for i, entry in enumerate(entries) if isinstance(entry, ConfigVar) and entry.name == after),
        None,
    )
    if index is None:
        return entries + section

    index += 1
    if index < len(entries) and entries[index] == SECTION_BREAK:
        index += 1
        # The anchor's own break closes the block, so don't double it.
        section = list(new_vars) + [SECTION_BREAK]

    return entries[:index] + section + entries[index:]


def apply_saved_settings(form: Mapping[str, Any]) -> dict[str, Any]:
    """Enforce the flag dependency on submitted admin settings.

    Enabling the browser check without the server check turns the server
    check on too.
    """
    saved = dict(form)
    if saved.get(CLIENT_FLAG) and not saved.get(SERVER_FLAG):
        saved[SERVER_FLAG] = saved[CLIENT_FLAG]
    return saved
