import hashlib

import pytest

from securepos.services.integrity_service import ContentIntegrityEngine

SALES = b"store,date,total\nS1,2024-01-01,1520.75\n"


@pytest.fixture
def engine():
    return ContentIntegrityEngine()


def test_digest_is_sha256_hex_by_default(engine):
    digest = engine.digest(SALES)
    assert digest == hashlib.sha256(SALES).hexdigest()
    assert len(digest) == engine.digest_length == 64
    assert engine.digest(SALES) == digest


def test_verify_accepts_own_digest(engine):
    assert engine.verify(SALES, engine.digest(SALES))


def test_single_bit_flip_changes_digest(engine):
    tampered = bytes([SALES[0] ^ 0x01]) + SALES[1:]
    assert not engine.verify(tampered, engine.digest(SALES))


def test_verify_is_exact_comparison(engine):
    digest = engine.digest(SALES)
    assert not engine.verify(SALES, digest.upper())
    assert not engine.verify(SALES, digest[:32])
    assert not engine.verify(SALES, f" {digest}")


def test_empty_input_has_a_digest(engine):
    assert engine.digest(b"") == hashlib.sha256(b"").hexdigest()


def test_other_strong_algorithms(engine):
    sha512 = ContentIntegrityEngine("SHA512")
    assert sha512.algorithm == "sha512"
    assert len(sha512.digest(SALES)) == 128


@pytest.mark.parametrize("algorithm", ["md5", "sha1", "crc32"])
def test_weak_algorithms_rejected(algorithm):
    with pytest.raises(ValueError):
        ContentIntegrityEngine(algorithm)
