"""bcrypt password hashing; every hash carries its own random salt"""
import bcrypt

BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_ROUNDS = 12


def get_password_hash(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password using bcrypt with a fresh per-password salt"""
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(encoded, salt)
    result = hashed.decode("utf-8")
    assert isinstance(result, str)
    return result


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    try:
        result = bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
        assert isinstance(result, bool)
        return result
    except ValueError:
        return False
