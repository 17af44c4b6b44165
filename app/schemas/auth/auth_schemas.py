from pydantic import BaseModel, EmailStr
from typing import Literal, Optional


class GoogleLoginRequest(BaseModel):
    id_token: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int
    email: EmailStr
    name: Optional[str] = None


class SessionUser(BaseModel):
    email: EmailStr
    role: Literal["admin"] = "admin"
