"""
Seguridad: emisión y validación de los JWT de los jugadores
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from wordquest.core.config import get_settings


def create_access_token(player_id: str) -> str:
    """
    Crea un JWT para que el jugador pueda hacer requests autenticados

    El JWT contiene el player_id y expira según jwt_expire_minutes
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    payload = {
        "sub": player_id,    # Subject: el jugador
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
        "iat": now,          # Issued at (cuándo se creó)
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decodifica y valida un JWT

    Retorna el payload si es válido, None si está expirado o corrupto
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None
