from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig


def verify_session_token(token: str, secret: Optional[str] = None) -> Optional[dict]:
    """
    Verify and decode a session access token issued by the auth provider

    Args:
        token: JWT token string
        secret: Verification secret, defaults to AUTH_JWT_SECRET

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            secret or ApplicationConfig.AUTH_JWT_SECRET,
            algorithms=["HS256"],
            audience=ApplicationConfig.AUTH_JWT_AUDIENCE,
        )
        return payload
    except JWTError:
        return None
