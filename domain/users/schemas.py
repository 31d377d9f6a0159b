from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    admin = "ADMIN"
    user = "USER"


class _UserBody(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email", mode="after", check_fields=False)
    @classmethod
    def normalize_email(cls, value):
        return value.lower() if value else value


class UserRegister(_UserBody):
    name: str = Field(min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(min_length=1)


class UserLogin(_UserBody):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserCreate(UserRegister):
    role: UserRole


class UserUpdate(_UserBody):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
