# backend/mercado/core/security.py
"""
Utilidades de seguridad: hash de contraseñas y firma de la cookie de sesión.
"""

from typing import Optional

import bcrypt
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from mercado.core.config import settings

_SESSION_SALT = "mercado-admin-session"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica si la contraseña coincide con el hash guardado."""
    if isinstance(plain_password, str):
        plain_password = plain_password.encode("utf-8")
    if isinstance(hashed_password, str):
        hashed_password = hashed_password.encode("utf-8")

    try:
        return bcrypt.checkpw(plain_password, hashed_password)
    except ValueError:
        # Hash con formato inválido en la tabla de configuraciones
        return False


def get_password_hash(password: str) -> str:
    """Genera un hash bcrypt de la contraseña, como texto para guardarlo."""
    if isinstance(password, str):
        password = password.encode("utf-8")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.SECRET_KEY, salt=_SESSION_SALT)


def sign_session_id(session_id: str) -> str:
    """Firma el ID de sesión para guardarlo en la cookie."""
    return _serializer().dumps(session_id)


def unsign_session_id(cookie_value: str, max_age: Optional[int] = None) -> Optional[str]:
    """Devuelve el ID de sesión de una cookie válida, o None si es inválida o expiró."""
    try:
        return _serializer().loads(cookie_value, max_age=max_age or settings.SESSION_MAX_AGE)
    except (BadSignature, SignatureExpired):
        return None
