"""Tests for the hash primitives and algorithm lookup."""

from __future__ import annotations

import hashlib

import pytest

from treedigest.errors import ConfigurationError, HashStateError, UnknownAlgorithmError
from treedigest.hashing import (
    HashPrimitive,
    Md5,
    Sha1,
    Sha256,
    Sha384,
    Sha512,
    available_algorithms,
    get_hash,
)

_EXPECTED = [
    ("MD5", Md5, hashlib.md5, 16),
    ("SHA1", Sha1, hashlib.sha1, 20),
    ("SHA256", Sha256, hashlib.sha256, 32),
    ("SHA384", Sha384, hashlib.sha384, 48),
    ("SHA512", Sha512, hashlib.sha512, 64),
]


# ── Primitives ───────────────────────────────────────────────────────────────

class TestPrimitives:

    @pytest.mark.parametrize("ident,cls,ref,size", _EXPECTED)
    def test_matches_hashlib(self, ident, cls, ref, size):
        h = cls()
        h.update(b"hello world")
        digest = h.final()
        assert digest == ref(b"hello world").digest()
        assert len(digest) == size
        assert h.digest_size == size
        assert h.identifier == ident

    def test_chunked_updates_equal_single_update(self):
        data = bytes(range(256)) * 50
        whole = Sha256()
        whole.update(data)

        chunked = Sha256()
        for i in range(0, len(data), 7):
            chunked.update(data[i:i + 7])

        assert chunked.final() == whole.final()

    def test_empty_input(self):
        h = Sha1()
        assert h.final() == hashlib.sha1(b"").digest()

    def test_final_invalidates(self):
        h = Md5()
        h.update(b"x")
        h.final()
        assert h.finalized
        with pytest.raises(HashStateError):
            h.update(b"y")
        with pytest.raises(HashStateError):
            h.final()

    def test_init_resets_state(self):
        h = Sha512()
        h.update(b"garbage")
        h.init()
        h.update(b"abc")
        assert h.final() == hashlib.sha512(b"abc").digest()

    def test_init_after_final_allows_reuse(self):
        h = Sha384()
        h.final()
        h.init()
        h.update(b"abc")
        assert h.final() == hashlib.sha384(b"abc").digest()

    def test_is_abstract(self):
        with pytest.raises(TypeError):
            HashPrimitive()  # type: ignore[abstract]


# ── Lookup ───────────────────────────────────────────────────────────────────

class TestGetHash:

    def test_available_algorithms(self):
        assert available_algorithms() == ["MD5", "SHA1", "SHA256", "SHA384", "SHA512"]

    @pytest.mark.parametrize("ident", ["sha256", "SHA256", "Sha256", "sHa256"])
    def test_case_insensitive(self, ident):
        assert isinstance(get_hash(ident), Sha256)

    def test_default_is_sha1(self):
        assert isinstance(get_hash(), Sha1)
        assert isinstance(get_hash(None), Sha1)
        assert isinstance(get_hash(""), Sha1)

    def test_unknown_is_configuration_error(self):
        with pytest.raises(UnknownAlgorithmError) as exc_info:
            get_hash("SHA3")
        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.identifier == "SHA3"

    def test_each_call_returns_fresh_instance(self):
        a = get_hash("MD5")
        b = get_hash("MD5")
        assert a is not b
        a.update(b"only a")
        assert b.final() == hashlib.md5(b"").digest()
