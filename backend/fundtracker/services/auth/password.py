# backend/fundtracker/services/auth/password.py
"""
Password hashing and verification using bcrypt (via passlib).

Cost factor 12 keeps a hash around a quarter of a second. Salts are
generated by bcrypt and embedded in the hash string.
"""

from passlib.context import CryptContext

# "deprecated='auto'" lets verify() flag hashes made with older settings
_pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,
)

# Verified against when the username is unknown, so a failed login costs
# the same whether or not the account exists
_DUMMY_HASH = _pwd_context.hash("fundtracker-timing-equalizer")


class PasswordService:
    """
    Stateless password hashing helpers.

    Plaintext passwords are never stored; participants only ever carry
    hashed_password.
    """

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash a plaintext password.

        Example:
            >>> PasswordService.hash_password("s3cret-pass").startswith("$2b$")
            True
        """
        return _pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str | None) -> bool:
        """
        Check a plaintext password against a stored hash (timing-safe).

        A missing hash never verifies but still spends the time of a real check.
        """
        if not hashed_password:
            _pwd_context.verify(plain_password, _DUMMY_HASH)
            return False
        return _pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def needs_rehash(hashed_password: str) -> bool:
        """True if the hash was made with weaker settings than the current ones."""
        return _pwd_context.needs_update(hashed_password)
