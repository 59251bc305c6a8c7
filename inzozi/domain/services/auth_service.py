# inzozi/domain/services/auth_service.py

from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import uuid

from inzozi.domain.models.principal import Principal

ACCESS_TOKEN_TYPE = "access"
REQUIRED_CLAIMS = ("sub", "exp", "iat", "type", "jti", "email")


class AuthService:
    """
    Domain service for session token claims.
    """

    @staticmethod
    def new_session_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def create_token_payload(
            principal: Principal,
            issued_at: datetime,
            expires_delta: timedelta,
            session_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a token payload with standard claims plus the principal snapshot.

        Args:
            principal: The user the token is issued to
            issued_at: Current time, from the injected clock
            expires_delta: Token validity window
            session_id: Session identifier; a fresh one is generated when omitted

        Returns:
            Dict with all token claims
        """
        expire = issued_at + expires_delta

        payload = {
            "sub": principal.id,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
            "type": ACCESS_TOKEN_TYPE,
            "jti": session_id or AuthService.new_session_id(),
        }
        payload.update(principal.to_dict())
        return payload

    @staticmethod
    def has_valid_shape(token_payload: Dict[str, Any]) -> bool:
        """Check required claims and the token type."""
        if not all(k in token_payload for k in REQUIRED_CLAIMS):
            return False
        if not isinstance(token_payload.get("exp"), (int, float)):
            return False
        return token_payload.get("type") == ACCESS_TOKEN_TYPE

    @staticmethod
    def is_expired(token_payload: Dict[str, Any], now: datetime) -> bool:
        return token_payload["exp"] <= int(now.timestamp())

    @staticmethod
    def remaining_seconds(token_payload: Dict[str, Any], now: datetime) -> int:
        """Seconds left before ``exp``; zero or negative once expired."""
        return int(token_payload["exp"]) - int(now.timestamp())

    @staticmethod
    def principal_from_payload(token_payload: Dict[str, Any]) -> Principal:
        data = dict(token_payload)
        data.setdefault("id", token_payload.get("sub"))
        return Principal.from_dict(data)
