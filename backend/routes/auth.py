# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from errors import ReviewAppError
from models.users import User
from schemas import user as schemas
from services.credentials import CredentialStore
from utils.audit import write_log, client_ip
from utils.tokenJWT import TokenService, get_token_service, get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])


def _auth_response(user: User, tokens: TokenService):
    return {"token": tokens.issue(user), "user": user}


# Register a new user and sign them in
@router.post("/signup", response_model=schemas.AuthResponse)
def signup(
    payload: schemas.UserCredentials,
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    store = CredentialStore(db)
    try:
        user = store.signup(payload.email, payload.password)
    except ReviewAppError as e:
        write_log(db, user_id=None, action="SIGNUP", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email, "reason": e.message})
        raise

    write_log(db, user_id=user.id, action="SIGNUP", resource="auth",
              ip=client_ip(request), meta={"email": user.email})
    return _auth_response(user, tokens)


# Authenticate user and issue a session token
@router.post("/login", response_model=schemas.AuthResponse)
def login(
    payload: schemas.UserCredentials,
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    store = CredentialStore(db)
    try:
        user = store.login(payload.email, payload.password)
    except ReviewAppError:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email})
        raise

    write_log(db, user_id=user.id, action="LOGIN", resource="auth",
              ip=client_ip(request), meta={"email": user.email})
    return _auth_response(user, tokens)


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
