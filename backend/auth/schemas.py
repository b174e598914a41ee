# backend/auth/schemas.py

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class SessionSchema(BaseModel):
    email: EmailStr
    name: Optional[str] = Field(None, min_length=1)
