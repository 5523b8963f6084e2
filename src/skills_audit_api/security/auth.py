"""Authentication and authorization utilities.

Tokens are issued by the identity provider. Their subject is the employee's
external_id; the acting employee is resolved from the record store on
every request.
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from skills_audit_api.config import get_settings
from skills_audit_api.dependencies import get_employee_service
from skills_audit_api.models.domain.actor import ActorContext
from skills_audit_api.services.employee_service import EmployeeService


def create_access_token(external_id: str, email: str) -> str:
    """Create a JWT access token the way the identity provider does.

    Args:
        external_id: Identity provider subject
        email: Account email

    Returns:
        JWT token string
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    payload = {
        "sub": external_id,
        "email": email,
        "exp": now + timedelta(hours=settings.jwt_expiration_hours),
        "iat": now,
    }
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Args:
        token: JWT token string

    Returns:
        Token payload

    Raises:
        HTTPException: If token is invalid or expired
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_aud": settings.jwt_audience is not None},
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from e

    if not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return payload


async def get_current_actor(
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(HTTPBearer(auto_error=False))
    ] = None,
) -> ActorContext:
    """Resolve the authenticated employee from the bearer token.

    Returns:
        ActorContext for the acting employee

    Raises:
        HTTPException: If the token is missing or invalid, or the employee
            is unknown or inactive
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_token(credentials.credentials)
    employee = await employee_service.get_by_external_id(payload["sub"])

    if employee is None or not employee.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is not registered or has been deactivated",
        )

    return ActorContext(
        employee_id=employee.id,
        external_id=employee.external_id,
        email=employee.email,
        role=employee.role,
    )


async def require_admin(
    actor: Annotated[ActorContext, Depends(get_current_actor)],
) -> ActorContext:
    """Require the acting employee to have the admin role.

    Raises:
        HTTPException: If the actor is not an admin
    """
    if not actor.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return actor


def ensure_can_access(actor: ActorContext, employee_id: UUID) -> None:
    """Allow admins everywhere and employees only on their own records.

    Raises:
        HTTPException: If the actor may not touch the employee's records
    """
    if not actor.can_access_employee(employee_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access to another employee's records is not allowed",
        )


CurrentActor = Annotated[ActorContext, Depends(get_current_actor)]
AdminActor = Annotated[ActorContext, Depends(require_admin)]
