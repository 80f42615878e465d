import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from arena.config import settings
from arena.db.database import Base, engine

# API 라우터 임포트
from arena.api.users import router as users_router
from arena.api.characters import router as characters_router
from arena.api.teams import router as teams_router
from arena.api.fights import router as fights_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 사용자 테이블 생성
    Base.metadata.create_all(bind=engine)
    yield

# FastAPI 앱 생성
app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(users_router)
app.include_router(characters_router)
app.include_router(teams_router)
app.include_router(fights_router)

@app.get("/")
async def root():
    """헬스 체크 및 서버 상태 확인"""
    return {"status": "Hero Arena 서버 실행 중", "storage": settings.STORAGE_BACKEND}
