"""
Vérification des jetons d'accès émis par le fournisseur d'identité.

Le cycle de vie des jetons (émission, rafraîchissement) est externe: ce module se
contente de décoder et valider un JWT pour en extraire l'identité de l'appelant.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError
from pydantic import BaseModel, ValidationError

from inyon.domain.entities import CallerIdentity


class TokenData(BaseModel):
    """Données contenues dans un token JWT."""

    sub: str


def create_access_token(
    secret: str, alg: str, expires_min: int, payload: dict[str, Any]
) -> str:
    """Crée un token JWT avec expiration (outillage de dev et de tests)."""
    to_encode = payload.copy()
    expire = datetime.now(UTC) + timedelta(minutes=expires_min)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret, algorithm=alg)


def decode_token(token: str, secret: str, alg: str) -> TokenData | None:
    """Décode et valide un token JWT."""
    try:
        data = jwt.decode(token, secret, algorithms=[alg])
        return TokenData(**data)
    except (InvalidTokenError, ValidationError):
        return None


def caller_from_authorization(
    authorization: str | None, secret: str, alg: str
) -> CallerIdentity | None:
    """Extrait l'identité depuis un en-tête `Authorization: Bearer <jwt>`, sinon None."""
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    data = decode_token(authorization.split(" ", 1)[1].strip(), secret, alg)
    if not data or not data.sub:
        return None
    return CallerIdentity(user_id=data.sub)
