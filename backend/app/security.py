from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt
from jose.exceptions import JWTClaimsError
from app.settings import get_settings

def create_access_token(user_id: str, *, expires_minutes: Optional[int] = None) -> str:
    """
    Tokens normally come from the identity provider; this mints compatible
    ones for local development and tests.
    """
    s = get_settings()
    issued = datetime.now(timezone.utc)
    lifetime = timedelta(minutes=expires_minutes or s.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": user_id, "iat": issued, "exp": issued + lifetime}
    return jwt.encode(claims, s.SECRET_KEY, algorithm=s.ALGORITHM)

def verify_user_token(token: str) -> str:
    """
    Return the user id (`sub`) of a signed, unexpired token.
    Raises jose's JWTError (or ExpiredSignatureError) otherwise.
    """
    s = get_settings()
    claims = jwt.decode(
        token,
        s.SECRET_KEY,
        algorithms=[s.ALGORITHM],
        options={"require_exp": True, "require_sub": True},
    )
    sub = claims["sub"]
    if not isinstance(sub, str) or not sub.strip():
        raise JWTClaimsError("Invalid subject")
    return sub
