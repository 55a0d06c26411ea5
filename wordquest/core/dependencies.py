"""
Dependencies de FastAPI para autenticacion e inyeccion de BD
"""

import secrets
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from wordquest.core.config import get_settings
from wordquest.core.security import decode_access_token
from wordquest.database import get_database
from wordquest.repositories.player_repository import PlayerRepository
from wordquest.models.player import Player

# Esquema de seguridad: espera un header "Authorization: Bearer <token>"
security = HTTPBearer()


async def get_current_player(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> Player:
    """
    Dependency que valida el JWT del jugador.

    El "sub" del token es la prueba de propiedad: los premios y el ranking
    personal solo se sirven para ese jugador.
    """
    payload = decode_access_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token invalido o expirado",
            headers={"WWW-Authenticate": "Bearer"},
        )

    player_id = payload.get("sub")
    if not player_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Payload del token invalido",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Busco el jugador en la BD
    player = await PlayerRepository(db).get_by_id(player_id)

    if not player:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Jugador no encontrado",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return player


async def require_admin_key(
    x_admin_key: Annotated[Optional[str], Header()] = None
) -> None:
    """
    Dependency para los endpoints de /admin.

    Sin admin_api_key configurada los endpoints quedan cerrados.
    """
    expected = get_settings().admin_api_key

    if not expected or not x_admin_key or not secrets.compare_digest(x_admin_key, expected):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin key invalida",
        )


# Alias de tipos para que se vea mas limpio en los endpoints
CurrentPlayer = Annotated[Player, Depends(get_current_player)]
Database = Annotated[AsyncIOMotorDatabase, Depends(get_database)]
AdminKey = Depends(require_admin_key)
