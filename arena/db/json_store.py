import json
import logging
import os
from typing import List, Optional

from arena.db.repository import CharacterRepository, FightRepository
from arena.models.characters import Character
from arena.models.fights import FightRecord

logger = logging.getLogger(__name__)

class JsonFile:
    """JSON 배열 파일 하나를 읽고 쓰는 헬퍼. 파일이 없으면 빈 목록으로 취급"""

    def __init__(self, path: str):
        self.path = path

    def read(self) -> List[dict]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def write(self, rows: List[dict]):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(rows, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
        logger.debug(f"{self.path} 저장 ({len(rows)}건)")

class JsonCharacterRepository(CharacterRepository):
    def __init__(self, data_dir: str):
        self.file = JsonFile(os.path.join(data_dir, "characters.json"))

    def list_all(self) -> List[Character]:
        return [Character(**row) for row in self.file.read()]

    def get_by_id(self, character_id: int) -> Optional[Character]:
        return next((c for c in self.list_all() if c.id == character_id), None)

    def add(self, character: Character):
        rows = self.file.read()
        rows.append(character.model_dump(mode="json"))
        self.file.write(rows)

    def update(self, character_id: int, fields: dict):
        rows = self.file.read()
        for row in rows:
            if row.get("id") == character_id:
                row.update(fields)
        self.file.write(rows)

    def remove(self, character_id: int):
        rows = [row for row in self.file.read() if row.get("id") != character_id]
        self.file.write(rows)

    def replace_all(self, characters: List[Character]):
        self.file.write([c.model_dump(mode="json") for c in characters])

class JsonFightRepository(FightRepository):
    def __init__(self, data_dir: str):
        self.file = JsonFile(os.path.join(data_dir, "fights.json"))

    def list_all(self) -> List[FightRecord]:
        return [FightRecord(**row) for row in self.file.read()]

    def get_by_id(self, fight_id: int) -> Optional[FightRecord]:
        return next((f for f in self.list_all() if f.fight_id == fight_id), None)

    def add(self, record: FightRecord):
        rows = self.file.read()
        rows.append(record.model_dump(mode="json"))
        self.file.write(rows)

    def update(self, fight_id: int, fields: dict):
        rows = self.file.read()
        for row in rows:
            if row.get("fight_id") == fight_id:
                row.update(fields)
        self.file.write(rows)

    def remove(self, fight_id: int):
        rows = [row for row in self.file.read() if row.get("fight_id") != fight_id]
        self.file.write(rows)
