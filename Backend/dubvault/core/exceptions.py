from fastapi import HTTPException
from typing import Any, Dict, Optional

class DubVaultException(HTTPException):
    """Base exception for DubVault API"""
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class NotFoundException(DubVaultException):
    """Resource not found"""
    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            status_code=404,
            detail=f"{resource} with id {resource_id} not found"
        )

class DuplicateError(DubVaultException):
    """Resource already exists"""
    def __init__(self, field: str, value: str):
        super().__init__(
            status_code=400,
            detail=f"{field} '{value}' already exists"
        )

class BadRequestError(DubVaultException):
    def __init__(self, message: str):
        super().__init__(status_code=400, detail=message)

class UnauthorizedError(DubVaultException):
    """User is not authorized"""
    def __init__(self, message: str = "Not authorized"):
        super().__init__(
            status_code=401,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"}
        )

class ForbiddenError(DubVaultException):
    """User is authenticated but lacks permission"""
    def __init__(self, message: str = "Forbidden"):
        super().__init__(status_code=403, detail=message)

class InvalidTransitionError(DubVaultException):
    """Moderation status cannot move from its current value"""
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            status_code=409,
            detail=f"Cannot change track status from '{current}' to '{target}'"
        )
