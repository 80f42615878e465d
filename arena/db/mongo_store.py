import logging
from typing import List, Optional
from pymongo import ReplaceOne, DeleteMany

from arena.db.repository import CharacterRepository, FightRepository
from arena.models.characters import Character
from arena.models.fights import FightRecord

logger = logging.getLogger(__name__)

def _strip_object_id(doc: dict) -> dict:
    doc = dict(doc)
    doc.pop("_id", None)
    return doc

class MongoCharacterRepository(CharacterRepository):
    def __init__(self, mongo_db):
        self.collection = mongo_db["characters"]

    def list_all(self) -> List[Character]:
        return [Character(**_strip_object_id(doc)) for doc in self.collection.find({}).sort("id", 1)]

    def get_by_id(self, character_id: int) -> Optional[Character]:
        doc = self.collection.find_one({"id": int(character_id)})
        return Character(**_strip_object_id(doc)) if doc else None

    def add(self, character: Character):
        self.collection.insert_one(character.model_dump(mode="json"))

    def update(self, character_id: int, fields: dict):
        update_doc = {"$set": {k: v for k, v in fields.items() if v is not None}}
        unset = {k: "" for k, v in fields.items() if v is None}
        if unset:
            update_doc["$unset"] = unset
        if not update_doc["$set"]:
            del update_doc["$set"]
        self.collection.update_one({"id": int(character_id)}, update_doc)
        logger.debug(f"캐릭터 {character_id} 갱신: {list(fields)}")

    def remove(self, character_id: int):
        self.collection.delete_one({"id": int(character_id)})

    def replace_all(self, characters: List[Character]):
        """전체 목록을 덮어씁니다. 쓰기에 실패해도 기존 문서를 먼저 지우지 않음"""
        ids = [c.id for c in characters]
        operations = [
            ReplaceOne({"id": c.id}, c.model_dump(mode="json"), upsert=True)
            for c in characters
        ]
        operations.append(DeleteMany({"id": {"$nin": ids}}))
        self.collection.bulk_write(operations, ordered=True)
        logger.debug(f"캐릭터 전체 갱신 ({len(ids)}건)")

class MongoFightRepository(FightRepository):
    def __init__(self, mongo_db):
        self.collection = mongo_db["fights"]

    def list_all(self) -> List[FightRecord]:
        return [FightRecord(**_strip_object_id(doc)) for doc in self.collection.find({}).sort("fight_id", 1)]

    def get_by_id(self, fight_id: int) -> Optional[FightRecord]:
        doc = self.collection.find_one({"fight_id": int(fight_id)})
        return FightRecord(**_strip_object_id(doc)) if doc else None

    def add(self, record: FightRecord):
        self.collection.insert_one(record.model_dump(mode="json"))

    def update(self, fight_id: int, fields: dict):
        self.collection.update_one(
            {"fight_id": int(fight_id)},
            {"$set": fields}
        )
        logger.debug(f"전투 기록 {fight_id} 갱신: {list(fields)}")

    def remove(self, fight_id: int):
        self.collection.delete_one({"fight_id": int(fight_id)})
