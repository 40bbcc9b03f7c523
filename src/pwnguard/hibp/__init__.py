"""
Have I Been Pwned (HIBP) password checking.

Checks passwords against the Pwned Passwords corpus using k-anonymity:
only the first 5 characters of the SHA-1 hash leave this system.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from pwnguard.hibp.models import (
    CheckOutcome,
    HashParts,
    PasswordCheckResult,
    ScriptDescriptor,
)
from pwnguard.hibp.config import HIBPSettings
from pwnguard.hibp.digest import digest_and_split
from pwnguard.hibp.client import (
    AiohttpTransport,
    HIBPClient,
    Transport,
    check_password,
    check_password_sync,
)
from pwnguard.hibp.integration import (
    describe_client_check,
    validate_new_password,
    validate_new_password_sync,
)

__all__ = [
    "HIBPClient",
    "HIBPSettings",
    "Transport",
    "AiohttpTransport",
    "CheckOutcome",
    "HashParts",
    "PasswordCheckResult",
    "ScriptDescriptor",
    "digest_and_split",
    "check_password",
    "check_password_sync",
    "validate_new_password",
    "validate_new_password_sync",
    "describe_client_check",
]
