"""
Core security utilities for password hashing and session token encoding.
"""
from typing import Optional
from jose import jwt, JWTError
from passlib.crypto.digest import pbkdf2_hmac
from passlib.utils import consteq
from pydantic import BaseModel, Field, StrictInt, ValidationError
import secrets
import string
import logging

from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Salted PBKDF2-HMAC password hasher.

    Digests are self-contained strings of the form ``<salt>:<derived key hex>``.
    The iteration count is not stored in the digest, so changing it
    invalidates every existing digest.
    """
    SEPARATOR = ":"

    def __init__(
        self,
        iterations: int = 10000,
        key_length: int = 64,
        digest: str = "sha512",
        salt_bytes: int = 32,
    ):
        self.iterations = iterations
        self.key_length = key_length
        self.digest = digest
        self.salt_bytes = salt_bytes

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Args:
            password: Plain text password

        Returns:
            str: Digest string
        """
        salt = secrets.token_hex(self.salt_bytes)
        return f"{salt}{self.SEPARATOR}{self._derive(password, salt)}"

    def verify(self, password: str, digest: str) -> bool:
        """
        Verify a password against a digest.

        Args:
            password: Plain text password
            digest: Digest produced by :meth:`hash`

        Returns:
            bool: True if the password matches; False on mismatch or a malformed digest
        """
        if not isinstance(password, str) or not isinstance(digest, str):
            return False
        parts = digest.split(self.SEPARATOR)
        if len(parts) != 2 or not all(parts):
            return False
        salt, stored_key = parts
        if not all(char in string.hexdigits for char in stored_key):
            return False
        try:
            return consteq(self._derive(password, salt), stored_key)
        except (UnicodeError, TypeError, ValueError):
            logger.debug("Password verification rejected an undecodable password or salt")
            return False

    def _derive(self, password: str, salt: str) -> str:
        return pbkdf2_hmac(self.digest, password, salt, self.iterations, self.key_length).hex()


class TokenPayload(BaseModel):
    """
    Claims carried inside a session token.

    Only ``subjectId`` and ``exp`` are required. ``role`` and ``email`` are
    advisory copies for clients and are never used for authorization.
    ``jti`` makes two tokens issued to one user in the same second distinct.
    """
    subject_id: StrictInt = Field(alias="subjectId")
    exp: StrictInt
    role: Optional[str] = None
    email: Optional[str] = None
    jti: Optional[str] = None

    class Config:
        populate_by_name = True
        frozen = True


class TokenCodec:
    """
    Encodes and decodes HMAC-signed, three-segment bearer tokens.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def encode(self, payload: TokenPayload) -> str:
        """
        Serialize and sign a token payload.

        Args:
            payload: Claims to encode

        Returns:
            str: Token in ``header.payload.signature`` form
        """
        claims = payload.model_dump(by_alias=True, exclude_none=True)
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[TokenPayload]:
        """
        Verify the signature of a token and parse its payload.

        Expiry is not checked here.

        Args:
            token: Raw token string

        Returns:
            TokenPayload if the token is well formed and correctly signed, None otherwise
        """
        if not isinstance(token, str) or not token.isascii() or token.count(".") != 2:
            return None
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
            return TokenPayload.model_validate(claims)
        except JWTError:
            return None
        except ValidationError:
            logger.debug("Token rejected: payload is missing required claims")
            return None


# Default instances built from settings
password_hasher = PasswordHasher(iterations=settings.password_hash_iterations)
token_codec = TokenCodec(settings.secret_key, settings.algorithm)

def hash_password(password: str) -> str:
    """
    Hash a password using the configured hasher.

    Args:
        password: Plain text password

    Returns:
        str: Password digest
    """
    return password_hasher.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a digest using the configured hasher.

    Args:
        plain_password: Plain text password
        hashed_password: Digest to compare against

    Returns:
        bool: True if password matches digest
    """
    return password_hasher.verify(plain_password, hashed_password)
