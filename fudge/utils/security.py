import bcrypt

from fudge import config


def hash_password(password: str, rounds: int = None) -> str:
    """bcrypt-хэш пароля (cost из конфига, по умолчанию 12)"""
    salt = bcrypt.gensalt(rounds=rounds or config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # битый хэш в БД
        return False
