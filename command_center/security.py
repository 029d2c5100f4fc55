"""Password hashing for dashboard users (bcrypt)."""

import bcrypt


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a stored hash.

    No endpoint authenticates yet; the users API only stores hashes. This is
    the counterpart used to confirm what hash_password() wrote.
    """
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash
        return False
