"""
SHA-1 digesting and prefix/suffix split for k-anonymity range queries.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import hashlib

from pwnguard.hibp.models import HashParts

PREFIX_LENGTH = 5


def sha1_hex(secret: str) -> str:
    """Lowercase hex SHA-1 of the UTF-8 encoded secret."""
    return hashlib.sha1(secret.encode("utf-8")).hexdigest()


def split_digest(digest: str) -> HashParts:
    """Split a 40-character digest into its 5-char prefix and 35-char suffix."""
    return HashParts(prefix=digest[:PREFIX_LENGTH], suffix=digest[PREFIX_LENGTH:])


def digest_and_split(secret: str, already_hashed: bool = False) -> HashParts:
    """Derive the range query key and local comparison key from a password.

    Args:
        secret: Password to check (NOT stored or logged), or its SHA-1
            hex digest when ``already_hashed`` is set
        already_hashed: Use ``secret`` verbatim as the digest. The caller
            guarantees the format; it is not validated here.

    Returns:
        HashParts with prefix and suffix
    """
    digest = secret if already_hashed else sha1_hex(secret)
    return split_digest(digest)
