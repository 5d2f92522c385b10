"""
Credential hashing with bcrypt.

bcrypt embeds the salt and cost factor in the hash, so a single column is
enough to verify later.
"""

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only reads the first 72 bytes; bcrypt 5 rejects longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash a plaintext credential.

    Args:
        password: Plaintext credential
        rounds: bcrypt cost factor (log2 of iterations)

    Returns:
        bcrypt hash as text
    """
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext credential against a stored bcrypt hash."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
