import logging
from collections import OrderedDict
from typing import List

from arena.core.exceptions import NotFoundError, InvalidMatchupError
from arena.db.repository import CharacterRepository
from arena.models.characters import Character
from arena.services.characters import paginate

logger = logging.getLogger(__name__)

TEAM_SIZE = 3

def normalize_team_name(name: str) -> str:
    return name.strip().upper()

def get_team_members(name: str, repo: CharacterRepository) -> List[Character]:
    """팀 구성원을 id 순서(선두 → 후열)로 반환합니다"""
    name = normalize_team_name(name)
    return sorted((c for c in repo.list_all() if c.team == name), key=lambda c: c.id)

def _validate_members(ids: List[int], characters: List[Character]) -> List[Character]:
    if len(ids) != TEAM_SIZE or len(set(ids)) != TEAM_SIZE:
        raise ValueError(f"서로 다른 캐릭터 ID {TEAM_SIZE}개를 보내야 합니다.")

    by_id = {c.id: c for c in characters}
    missing = [i for i in ids if i not in by_id]
    if missing:
        raise NotFoundError(f"존재하지 않는 캐릭터입니다: {missing}")

    selected = [by_id[i] for i in ids]
    if len({c.kind for c in selected}) != 1:
        raise InvalidMatchupError("영웅과 빌런을 같은 팀에 섞을 수 없습니다.")
    return selected

def _assign(name: str, ids: List[int], characters: List[Character], repo: CharacterRepository) -> List[Character]:
    for character in characters:
        if character.id in ids:
            character.team = name
        elif character.team == name:
            # 더 이상 팀에 속하지 않는 캐릭터는 팀 해제
            character.team = None
    repo.replace_all(characters)
    logger.info(f"팀 {name} 구성: {ids}")
    return [c for c in characters if c.id in ids]

def create_team(name: str, ids: List[int], repo: CharacterRepository) -> List[Character]:
    name = normalize_team_name(name)
    if not name:
        raise ValueError("팀 이름은 비어 있을 수 없습니다.")

    characters = repo.list_all()
    _validate_members(ids, characters)
    return _assign(name, ids, characters, repo)

def update_team(name: str, ids: List[int], repo: CharacterRepository) -> List[Character]:
    name = normalize_team_name(name)
    current = get_team_members(name, repo)
    if not current:
        raise NotFoundError(f"팀이 존재하지 않습니다: {name}")

    characters = repo.list_all()
    selected = _validate_members(ids, characters)
    team_kind = current[0].kind
    if selected[0].kind != team_kind:
        raise InvalidMatchupError(f"모든 캐릭터는 {team_kind.value} 타입이어야 합니다.")
    return _assign(name, ids, characters, repo)

def delete_team(name: str, repo: CharacterRepository):
    name = normalize_team_name(name)
    characters = repo.list_all()
    if not any(c.team == name for c in characters):
        raise NotFoundError(f"팀이 존재하지 않습니다: {name}")

    for character in characters:
        if character.team == name:
            character.team = None
    repo.replace_all(characters)
    logger.info(f"팀 {name} 해체")

def list_teams(page: int, limit: int, repo: CharacterRepository) -> dict:
    """구성원이 정확히 3명인 팀만 반환합니다"""
    teams = OrderedDict()
    for character in sorted(repo.list_all(), key=lambda c: c.id):
        if character.team:
            teams.setdefault(character.team, []).append(
                {"id": character.id, "name": character.name, "kind": character.kind}
            )

    complete = [
        {"name": name, "members": members}
        for name, members in teams.items()
        if len(members) == TEAM_SIZE
    ]
    result = paginate(complete, page, limit)
    result["teams"] = result.pop("items")
    return result
