# backend/mercado/schemas/auth_schema.py
from pydantic import BaseModel


class AuthCheckResponse(BaseModel):
    is_admin: bool
