from functools import lru_cache

import bcrypt

from backend.core import config


def hash_password(plain: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """Hash compared against when no account matches, so both paths cost the same."""
    return hash_password("not-a-real-password")
