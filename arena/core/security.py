from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import jwt
from jwt import ExpiredSignatureError, InvalidTokenError
from arena.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = logging.getLogger(__name__)

TOKEN_TYPE = "access"

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)

def create_access_token(user_name: str, expires_minutes: Optional[int] = None) -> str:
    """사용자 이름을 sub 로 담은 액세스 토큰을 발급합니다

    만료 시간은 지정하지 않으면 ACCESS_TOKEN_EXPIRE_MINUTES 설정을 따릅니다.
    """
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": user_name
        , "type": TOKEN_TYPE
        , "iat": issued_at
        , "exp": issued_at + timedelta(minutes=minutes)
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access_token(token: str) -> Optional[str]:
    """유효한 액세스 토큰이면 사용자 이름을, 아니면 None 을 반환합니다"""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except ExpiredSignatureError:
        logger.info("만료된 토큰으로 요청")
        return None
    except InvalidTokenError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None
    return payload.get("sub")
