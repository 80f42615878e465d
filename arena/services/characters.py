import logging
import math
from typing import List

from arena.core.exceptions import NotFoundError
from arena.db.repository import CharacterRepository
from arena.models.characters import Character, CharacterKind, CharacterCreateRequest, CharacterUpdateRequest

logger = logging.getLogger(__name__)

def paginate(items: list, page: int, limit: int) -> dict:
    total = len(items)
    start = (page - 1) * limit
    return {
        "total": total,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "page": page,
        "limit": limit,
        "items": items[start:start + limit],
    }

def get_character(character_id: int, repo: CharacterRepository) -> Character:
    character = repo.get_by_id(character_id)
    if not character:
        raise NotFoundError(f"캐릭터가 존재하지 않습니다: {character_id}")
    return character

def list_characters(page: int, limit: int, repo: CharacterRepository) -> dict:
    result = paginate(repo.list_all(), page, limit)
    result["data"] = result.pop("items")
    return result

def find_by_kind(kind: CharacterKind, repo: CharacterRepository) -> List[Character]:
    return [c for c in repo.list_all() if c.kind == kind]

def find_by_city(city: str, repo: CharacterRepository) -> List[Character]:
    city = city.strip().lower()
    return [c for c in repo.list_all() if c.city and c.city.lower() == city]

def create_character(request: CharacterCreateRequest, repo: CharacterRepository) -> Character:
    name = request.name.strip()
    if not name:
        raise ValueError("캐릭터 이름은 비어 있을 수 없습니다.")

    # 가장 큰 id + 1
    character = Character.create(repo.next_id(), name, request.kind, city=request.city)
    repo.add(character)
    logger.info(f"캐릭터 생성: [{character.id}] {character.name} ({character.kind.value})")
    return character

def update_character(character_id: int, request: CharacterUpdateRequest, repo: CharacterRepository) -> Character:
    get_character(character_id, repo)

    update_fields = request.model_dump(exclude_unset=True)
    if "name" in update_fields:
        if not update_fields["name"] or not update_fields["name"].strip():
            raise ValueError("캐릭터 이름은 비어 있을 수 없습니다.")
        update_fields["name"] = update_fields["name"].strip()

    if update_fields:
        repo.update(character_id, update_fields)
    return get_character(character_id, repo)

def delete_character(character_id: int, repo: CharacterRepository):
    get_character(character_id, repo)
    repo.remove(character_id)
    logger.info(f"캐릭터 삭제: {character_id}")
