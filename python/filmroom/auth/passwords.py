"""Password hashing and verification using bcrypt."""

import bcrypt


def hash_password(plain: str, rounds: int = 12) -> str:
    """Hash a plain password. Returns bcrypt hash string."""
    if not plain:
        raise ValueError("password cannot be empty")
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify plain password against stored hash. Never raises."""
    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False
