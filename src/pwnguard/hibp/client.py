"""
Pwned Passwords range-query client.

Implements the k-anonymity check against the Pwned Passwords API:
- SHA-1 the password locally, send only the first 5 hex characters
- Scan the returned SUFFIX:COUNT lines for the remaining 35 characters
- Collapse every failure into an indeterminate outcome

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod

import aiohttp

from pwnguard.hibp.config import DEFAULT_RANGE_URL, DEFAULT_TIMEOUT, HIBPSettings
from pwnguard.hibp.digest import digest_and_split
from pwnguard.hibp.models import CheckOutcome, PasswordCheckResult

logger = logging.getLogger(__name__)

# Shared with the browser routine, so it must stay valid in both Python re
# and ECMAScript RegExp. A record starts the body or follows whitespace and
# must be followed by ":<count>", which rules out substring hits.
MATCH_PATTERN = r"(?:^|\s){suffix}:\d+"
MATCH_FLAGS = "i"


def build_range_url(prefix: str, range_url: str = DEFAULT_RANGE_URL) -> str:
    """Build the range endpoint URL for a hash prefix."""
    return f"{range_url}{prefix}"


def _match_count(pattern: str, body: str) -> int | None:
    """Return 1 on a match, 0 on none, None if the pattern can't be evaluated."""
    try:
        return 1 if re.search(pattern, body, re.IGNORECASE) else 0
    except re.error as e:
        logger.warning(f"Suffix pattern could not be evaluated: {e}")
        return None


def match_suffix(body: str | None, suffix: str) -> CheckOutcome:
    """Decide membership of a digest suffix in a range response body.

    Args:
        body: Raw range response ("SUFFIX:COUNT" per line)
        suffix: Last 35 hex characters of the digest, any case

    Returns:
        CheckOutcome for the suffix
    """
    if not body:
        return CheckOutcome.INDETERMINATE

    found = _match_count(MATCH_PATTERN.replace("{suffix}", re.escape(suffix)), body)

    if found == 1:
        return CheckOutcome.FOUND
    elif found == 0:
        return CheckOutcome.NOT_FOUND

    return CheckOutcome.INDETERMINATE


class Transport(ABC):
    """Fetches a URL with a plain GET and no custom headers.

    ``fetch`` returns the body text, or None when the request failed.
    """

    @abstractmethod
    async def fetch(self, url: str) -> str | None:
        """Fetch ``url`` and return its body, or None on failure."""

    async def close(self) -> None:
        """Release any held connections."""


class AiohttpTransport(Transport):
    """Transport backed by a single aiohttp session."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        # A non-positive total would disable the timeout entirely
        self.timeout = timeout if timeout > 0 else DEFAULT_TIMEOUT
        self._session: aiohttp.ClientSession | None = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session exists."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AiohttpTransport":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str) -> str | None:
        session = await self._ensure_session()

        try:
            async with session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    logger.warning(f"Range query {url} returned HTTP {response.status}")
                    return None
                return await response.text()

        except asyncio.TimeoutError:
            logger.warning(f"Range query {url} timed out after {self.timeout}s")
            return None
        except aiohttp.ClientError as e:
            logger.warning(f"Range query {url} failed: {e}")
            return None


class HIBPClient:
    """Client for the Pwned Passwords range API.

    Only the 5-character hash prefix is ever sent. Each check issues
    exactly one request and is never retried or cached.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        range_url: str = DEFAULT_RANGE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize client.

        Args:
            transport: Transport to fetch with (default: aiohttp, owned by the client)
            range_url: Range endpoint, the prefix is appended verbatim
            timeout: Total request timeout in seconds for the default transport
        """
        self.range_url = range_url
        self.timeout = timeout
        self._transport = transport
        self._owns_transport = transport is None

    @classmethod
    def from_settings(
        cls,
        settings: HIBPSettings,
        transport: Transport | None = None,
    ) -> "HIBPClient":
        return cls(transport=transport, range_url=settings.range_url, timeout=settings.timeout)

    def _ensure_transport(self) -> Transport:
        if self._transport is None:
            self._transport = AiohttpTransport(timeout=self.timeout)
        return self._transport

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and self._transport is not None:
            await self._transport.close()
            self._transport = None

    async def __aenter__(self) -> "HIBPClient":
        self._ensure_transport()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def query_range(self, prefix: str, suffix: str) -> CheckOutcome:
        """Fetch the range for ``prefix`` and look for ``suffix`` in it."""
        url = build_range_url(prefix, self.range_url)
        transport = self._ensure_transport()

        try:
            body = await transport.fetch(url)
        except Exception as e:
            logger.warning(f"Transport raised during range query {url}: {e!r}")
            return CheckOutcome.INDETERMINATE

        if body is None:
            return CheckOutcome.INDETERMINATE

        outcome = match_suffix(body, suffix)
        logger.debug(f"Range query {url}: {outcome.value}")
        return outcome

    async def check_password(self, password: str, already_hashed: bool = False) -> CheckOutcome:
        """Check if a password has been exposed in data breaches.

        Args:
            password: Password to check (NOT stored or logged), or its
                SHA-1 hex digest when ``already_hashed`` is set
            already_hashed: Treat ``password`` as a SHA-1 hex digest

        Returns:
            CheckOutcome
        """
        parts = digest_and_split(password, already_hashed)
        return await self.query_range(parts.prefix, parts.suffix)

    async def check_password_result(
        self,
        password: str,
        already_hashed: bool = False,
    ) -> PasswordCheckResult:
        """Like check_password, wrapped in a reportable result."""
        parts = digest_and_split(password, already_hashed)
        outcome = await self.query_range(parts.prefix, parts.suffix)

        result = PasswordCheckResult(outcome=outcome, hash_prefix=parts.prefix)
        if outcome is CheckOutcome.INDETERMINATE:
            result.error = "Range query failed or returned no usable data"
        return result


async def check_password(
    password: str,
    already_hashed: bool = False,
    *,
    transport: Transport | None = None,
    settings: HIBPSettings | None = None,
) -> CheckOutcome:
    """Check a password with a short-lived client.

    Args:
        password: Password to check
        already_hashed: Treat ``password`` as a SHA-1 hex digest
        transport: Transport to use instead of a fresh aiohttp session
        settings: Endpoint and timeout (default: HIBPSettings())

    Returns:
        CheckOutcome
    """
    settings = settings or HIBPSettings()
    async with HIBPClient.from_settings(settings, transport=transport) as client:
        return await client.check_password(password, already_hashed)


# Convenience function for synchronous usage
def check_password_sync(
    password: str,
    already_hashed: bool = False,
    *,
    transport: Transport | None = None,
    settings: HIBPSettings | None = None,
) -> CheckOutcome:
    """Synchronous wrapper for check_password."""
    return asyncio.run(
        check_password(password, already_hashed, transport=transport, settings=settings)
    )
