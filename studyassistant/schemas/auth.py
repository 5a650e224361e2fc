
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=256)
    full_name: str = Field(min_length=1, max_length=120)

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class UserOut(BaseModel):
    id: int
    email: str
    full_name: str
    role: str = "user"
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class AuthOut(BaseModel):
    token: str
    user: UserOut

class MeOut(BaseModel):
    user: UserOut
