"""Password hashing via passlib's bcrypt backend."""

from functools import lru_cache

from passlib.context import CryptContext

DEFAULT_ROUNDS = 10


@lru_cache
def _context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return _context(rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash.

    Hashes that passlib cannot identify (e.g. a corrupt legacy row) count as a
    mismatch rather than an error.
    """
    try:
        return _context(DEFAULT_ROUNDS).verify(plain_password, hashed_password)
    except ValueError:
        return False
