from arena.config import settings
from arena.db.database import SessionLocal, mongo_client
from arena.db.repository import CharacterRepository, FightRepository
from arena.db.json_store import JsonCharacterRepository, JsonFightRepository
from arena.db.mongo_store import MongoCharacterRepository, MongoFightRepository

# DB 세션 주입
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_character_repository() -> CharacterRepository:
    if settings.STORAGE_BACKEND == "mongo":
        return MongoCharacterRepository(mongo_client)
    return JsonCharacterRepository(settings.DATA_DIR)

def get_fight_repository() -> FightRepository:
    if settings.STORAGE_BACKEND == "mongo":
        return MongoFightRepository(mongo_client)
    return JsonFightRepository(settings.DATA_DIR)
