# utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import jwt, JWTError
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import Settings, DEFAULT_SECRET_KEY, get_settings
from database import get_db
from errors import MissingTokenError, InvalidTokenError
from models.users import User
from services.credentials import CredentialStore

logger = logging.getLogger(__name__)

# auto_error is off so a missing header maps to our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


class TokenService:
    """Issues and verifies signed session tokens.

    The token carries the user id in ``sub`` and an absolute ``exp``. There is
    no revocation: a token stays valid until it expires.
    """

    def __init__(self, config: Settings):
        self.secret_key = config.SECRET_KEY or DEFAULT_SECRET_KEY
        self.algorithm = config.ALGORITHM
        self.expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
        if config.uses_default_secret:
            logger.warning("SECRET_KEY is not set. Using the insecure development key, do not run like this in production.")

    # Generate a new JWT for the given user
    def issue(self, user: User, expires_delta: timedelta = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or self.expires_delta)
        to_encode = {"sub": str(user.id), "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    # Return the user id embedded in a valid token
    def verify(self, token: Optional[str]) -> int:
        if not token:
            raise MissingTokenError()
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning("JWT error: %s", e)
            raise InvalidTokenError()

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            logger.warning("JWT error: unusable subject %r", subject)
            raise InvalidTokenError()


@lru_cache()
def get_token_service() -> TokenService:
    return TokenService(get_settings())


# Authorization gate: resolve the caller's user id from "Authorization: Bearer <token>"
def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    if credentials is None:
        logger.info("Rejected %s %s: missing bearer token", request.method, request.url.path)
        raise MissingTokenError()

    user_id = tokens.verify(credentials.credentials)
    request.state.user_id = user_id
    return user_id


# Retrieve the currently authenticated user row
def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    return CredentialStore(db).get(user_id)
