"""
Credential hashing for client passwords
Passwords are stored as "salt$digest" with scrypt, never in clear text
"""

import hashlib
import hmac
import secrets


def _generate_salt() -> str:
    return secrets.token_hex(16)


def _scrypt(raw: str, salt: str) -> str:
    return hashlib.scrypt(raw.encode(), salt=salt.encode(), n=16384, r=8, p=1).hex()


def hash_credential(raw: str) -> str:
    """Hash a credential with a fresh random salt"""
    salt = _generate_salt()
    return f"{salt}${_scrypt(raw, salt)}"


def verify_credential(raw: str, stored: str) -> bool:
    """Check a credential against a stored "salt$digest" value"""
    salt, sep, digest = stored.partition("$")
    if not sep:
        return False
    return hmac.compare_digest(_scrypt(raw, salt), digest)
