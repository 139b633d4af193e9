import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from dubvault.services.database import get_db
from dubvault.models.user import User
from dubvault.schemas.user import LoginRequest, Token
from dubvault.core.security import create_access_token, verify_password
from dubvault.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/auth/login", response_model=Token)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).where(User.username == credentials.username))
    user = result.scalar_one_or_none()
    # Same message for unknown user and wrong password
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.info(f"Failed login for '{credentials.username}'")
        raise UnauthorizedError("Incorrect username or password")
    return Token(access_token=create_access_token(str(user.id)))
