"""Caller identity from the auth_token cookie."""

from qa.domain.service import JWTService


def caller_id(jwt_service: JWTService, auth_token: str | None) -> str | None:
    """User ID of the caller, or None when anonymous.

    A missing, expired or tampered token is treated as anonymous; use cases
    that need a caller raise UnauthorizedError themselves.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    return str(user_id) if user_id else None
