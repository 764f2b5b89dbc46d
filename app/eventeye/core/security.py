import hashlib
import hmac
import secrets
from datetime import datetime, timedelta
from typing import Optional
import jwt
from eventeye.core.config import settings

def hash_password(password: str) -> str:
    """Salted PBKDF2-SHA256, stored as ``iterations$salt$digest``."""
    salt = secrets.token_hex(16)
    iterations = settings.PASSWORD_HASH_ITERATIONS
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"{iterations}${salt}${digest.hex()}"

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        iterations, salt, expected = hashed_password.split("$")
        digest = hashlib.pbkdf2_hmac("sha256", plain_password.encode(), salt.encode(), int(iterations))
    except ValueError:
        return False
    return hmac.compare_digest(digest.hex(), expected)

def create_access_token(user_id: str, session_id: str, expires_at: datetime) -> str:
    """Create JWT access token bound to a stored session"""
    to_encode = {
        "sub": user_id,
        "jti": session_id,
        "exp": expires_at,
        "iat": datetime.utcnow(),
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access_token(token: str) -> Optional[dict]:
    """Verify JWT access token"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None

def session_expiry() -> datetime:
    return datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

GOOGLE_ISSUERS = ("https://accounts.google.com", "accounts.google.com")

_jwks_client = None

def verify_google_id_token(id_token: str) -> dict:
    """Validate a Google ID token against Google's published signing keys."""
    global _jwks_client
    if _jwks_client is None:
        _jwks_client = jwt.PyJWKClient(settings.GOOGLE_JWKS_URL)
    signing_key = _jwks_client.get_signing_key_from_jwt(id_token)
    claims = jwt.decode(
        id_token,
        signing_key.key,
        algorithms=["RS256"],
        audience=settings.GOOGLE_CLIENT_ID,
    )
    if claims.get("iss") not in GOOGLE_ISSUERS:
        raise jwt.InvalidIssuerError("Invalid issuer")
    return claims
