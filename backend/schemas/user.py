from pydantic import BaseModel, ConfigDict
from typing import Optional


# Credentials for signup and login; emptiness is checked by the credential store
class UserCredentials(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# Public projection of a user (never includes the password hash)
class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str


# Returned by signup and login
class AuthResponse(BaseModel):
    token: str
    user: UserResponse
