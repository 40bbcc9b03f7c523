import re

import pytest

from pwnguard.hibp.digest import digest_and_split, sha1_hex, split_digest

from conftest import PASSWORD_DIGEST, PASSWORD_PREFIX, PASSWORD_SUFFIX

SAMPLES = ["", "password", "P@ssw0rd", "correct horse battery staple", "pässwörd", "密码", "a" * 1000]


def test_password_reference_vector():
    assert sha1_hex("password") == PASSWORD_DIGEST


@pytest.mark.parametrize("secret", SAMPLES)
def test_digest_is_40_lowercase_hex(secret):
    assert re.fullmatch(r"[0-9a-f]{40}", sha1_hex(secret))


@pytest.mark.parametrize("secret", SAMPLES)
def test_prefix_and_suffix_rebuild_digest(secret):
    parts = digest_and_split(secret)
    assert len(parts.prefix) == 5
    assert len(parts.suffix) == 35
    assert parts.prefix + parts.suffix == sha1_hex(secret)
    assert parts.digest == sha1_hex(secret)


def test_digest_is_deterministic():
    assert digest_and_split("hunter2") == digest_and_split("hunter2")
    assert digest_and_split("hunter2") != digest_and_split("hunter3")


def test_split_of_password():
    parts = digest_and_split("password")
    assert parts.prefix == PASSWORD_PREFIX
    assert parts.suffix == PASSWORD_SUFFIX


def test_already_hashed_is_used_verbatim():
    parts = digest_and_split(PASSWORD_DIGEST.upper(), already_hashed=True)
    assert parts.prefix == "5BAA6"
    assert parts.suffix == PASSWORD_SUFFIX.upper()


def test_split_digest():
    parts = split_digest("abcdef")
    assert (parts.prefix, parts.suffix) == ("abcde", "f")
