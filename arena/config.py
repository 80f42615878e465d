import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, model_validator
from pymongo import MongoClient

load_dotenv(dotenv_path=os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

class Settings(BaseModel):
    APP_TITLE: str = "Hero Arena API"

    # json | mongo
    STORAGE_BACKEND: str = "json"
    DATA_DIR: str = "data"

    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "hero_arena"

    DATABASE_URL: str = "sqlite:///./arena_users.db"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 120

    WIN_EXPERIENCE: int = 40
    LOSS_EXPERIENCE: int = 25
    BATTLE_SEED: Optional[int] = None

    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def check_rewards(self):
        if self.WIN_EXPERIENCE <= self.LOSS_EXPERIENCE:
            raise ValueError("WIN_EXPERIENCE는 LOSS_EXPERIENCE보다 커야 합니다.")
        if self.STORAGE_BACKEND not in ("json", "mongo"):
            raise ValueError(f"지원하지 않는 저장소입니다: {self.STORAGE_BACKEND}")
        return self

    @property
    def MONGO_CONFIG(self):
        client = MongoClient(self.MONGO_URL)
        db = client[self.MONGO_DB_NAME]
        return db

def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value not in (None, "") else None

settings = Settings(
    APP_TITLE=os.getenv("APP_TITLE", "Hero Arena API")
    , STORAGE_BACKEND=os.getenv("STORAGE_BACKEND", "json")
    , DATA_DIR=os.getenv("DATA_DIR", "data")
    , MONGO_URL=os.getenv("MONGO_URL", "mongodb://localhost:27017")
    , MONGO_DB_NAME=os.getenv("MONGO_DB_NAME", "hero_arena")
    , DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./arena_users.db")
    , SECRET_KEY=os.getenv("SECRET_KEY", "hero-arena-dev-secret-key-change-me-in-production")
    , ALGORITHM=os.getenv("ALGORITHM", "HS256")
    , ACCESS_TOKEN_EXPIRE_MINUTES=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 120))
    , WIN_EXPERIENCE=int(os.getenv("WIN_EXPERIENCE", 40))
    , LOSS_EXPERIENCE=int(os.getenv("LOSS_EXPERIENCE", 25))
    , BATTLE_SEED=_optional_int(os.getenv("BATTLE_SEED"))
    , LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
)
