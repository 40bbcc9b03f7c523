"""Shared fixtures for the breach check tests."""

import pytest

from pwnguard.hibp.client import Transport
from pwnguard.hibp.config import HIBPSettings

PASSWORD_DIGEST = "5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8"
PASSWORD_PREFIX = PASSWORD_DIGEST[:5]
PASSWORD_SUFFIX = PASSWORD_DIGEST[5:]

# Realistic range response for prefix 5BAA6, CRLF separated like the live API
PASSWORD_RANGE_BODY = (
    "003D68EB55068C33ACE09247EE4C639306B:3\r\n"
    "012C192B2F16F82EA0EB9EF18D9D539B0DD:1\r\n"
    "1E4C9B93F3F0682250B6CF8331B7EE68FD8:10434004\r\n"
    "1E2AAA439972480CEC7F16C795BBB429372:1\r\n"
    "FFFF9C1E2B7CB7D8C2A4C54B26E9E9A3F0B:2"
)


class FakeTransport(Transport):
    """In-memory transport that records every requested URL."""

    def __init__(self, body=None, error=None):
        self.body = body
        self.error = error
        self.urls = []
        self.closed = False

    async def fetch(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.body

    async def close(self):
        self.closed = True


@pytest.fixture
def found_transport():
    return FakeTransport(PASSWORD_RANGE_BODY)


@pytest.fixture
def enabled_settings():
    return HIBPSettings(server_check_enabled=True, client_check_enabled=True)
