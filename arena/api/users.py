from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
import logging

from arena.services import users

from arena.core.security import create_access_token

from arena.models.users import RegisterRequest, LoginRequest, TokenResponse

from arena.utils.database import get_db

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)

def _issue_token(name: str) -> str:
    return create_access_token(name)

@router.post("/register", response_model=TokenResponse, status_code=200)
def register_user(request: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = users.register_user(request.name, request.password, db)
        logger.info(f"사용자 등록: {user.name}")
        return {
            "message": "회원가입 완료"
            , "access_token": _issue_token(user.name)
        }
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=TokenResponse)
def login_user(request: LoginRequest, req: Request, db: Session = Depends(get_db)):
    user = users.authenticate_user(request.name, request.password, db)
    if not user:
        raise HTTPException(status_code=401, detail="잘못된 사용자 이름 또는 비밀번호입니다.")

    users.create_login_log(
        user=user,
        ip=req.client.host if req.client else None,
        user_agent=req.headers.get("user-agent", "unknown"),
        db=db
    )

    return {
        "message": "로그인 성공"
        , "access_token": _issue_token(user.name)
    }
