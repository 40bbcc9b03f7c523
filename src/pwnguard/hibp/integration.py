"""
Entry points for applications embedding the breach check.

The host decides when to call these (registration, profile edits) and
passes its current settings in explicitly.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging

from pwnguard.hibp.client import MATCH_FLAGS, MATCH_PATTERN, Transport, check_password
from pwnguard.hibp.config import HIBPSettings
from pwnguard.hibp.digest import PREFIX_LENGTH
from pwnguard.hibp.messages import ERROR_CODE, MessageCatalog
from pwnguard.hibp.models import CheckOutcome, ScriptDescriptor

logger = logging.getLogger(__name__)


async def validate_new_password(
    password: str,
    settings: HIBPSettings,
    existing_error: str | None = None,
    *,
    transport: Transport | None = None,
) -> str | None:
    """Password validator hook.

    Returns ERROR_CODE when the password is in the breach corpus. An error
    already set by another validator is left alone, and a disabled check or
    an indeterminate result never rejects the password.
    """
    if existing_error or not settings.server_check_enabled:
        return None

    outcome = await check_password(password, transport=transport, settings=settings)

    if outcome is CheckOutcome.FOUND:
        return ERROR_CODE
    if outcome is CheckOutcome.INDETERMINATE:
        logger.info("Breach check unavailable, accepting password")
    return None


def validate_new_password_sync(
    password: str,
    settings: HIBPSettings,
    existing_error: str | None = None,
    *,
    transport: Transport | None = None,
) -> str | None:
    """Synchronous wrapper for validate_new_password."""
    return asyncio.run(
        validate_new_password(password, settings, existing_error, transport=transport)
    )


def describe_client_check(
    field_selector: str,
    error_selector: str,
    settings: HIBPSettings,
    messages: MessageCatalog | None = None,
) -> ScriptDescriptor | None:
    """Describe the browser-side check for a password field.

    Returns None when the script is disabled, or when it is enabled without
    the server-side check it depends on.
    """
    if not settings.client_check_enabled or not settings.server_check_enabled:
        return None

    messages = messages or MessageCatalog()

    return ScriptDescriptor(
        field_selector=field_selector,
        error_selector=error_selector,
        warning_text=messages.warning,
        range_url=settings.range_url,
        match_pattern=MATCH_PATTERN,
        match_flags=MATCH_FLAGS,
        prefix_length=PREFIX_LENGTH,
    )
