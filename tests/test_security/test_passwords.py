from passlib.hash import bcrypt

from ascending.auth.passwords import hash_password, verify_password


def test_hash_is_salted_bcrypt() -> None:
    first = hash_password("hunter2", rounds=4)
    second = hash_password("hunter2", rounds=4)
    assert first.startswith("$2b$04$")
    assert first != second


def test_default_cost_factor() -> None:
    assert hash_password("hunter2").startswith("$2b$10$")


def test_verify_roundtrip() -> None:
    hashed = hash_password("hunter2", rounds=4)
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)


def test_verify_legacy_2a_hash() -> None:
    # bcryptjs writes $2a$ hashes; migrated users must still be able to log in
    legacy = bcrypt.using(ident="2a", rounds=4).hash("password")
    assert legacy.startswith("$2a$")
    assert verify_password("password", legacy)


def test_verify_garbage_hash_is_mismatch() -> None:
    assert verify_password("hunter2", "not-a-hash") is False
