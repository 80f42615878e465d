"""
테스트 공용 픽스처

- 전투 엔진용 고정 난수 소스
- 임시 디렉터리의 JSON 저장소
- 임시 저장소와 임시 사용자 DB에 연결된 TestClient
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from arena.battle import BattleEngine, RandomSource
from arena.db.database import Base
from arena.db.json_store import JsonCharacterRepository, JsonFightRepository
from arena.models.characters import Character, CharacterKind
from arena.services.fights import FightService


class FixedRandom(RandomSource):
    """주어진 값을 순서대로 반환하고, 끝나면 처음부터 반복합니다"""

    def __init__(self, values):
        super().__init__(seed=0)
        self.values = list(values)
        self.index = 0

    def random(self) -> float:
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value


# =============================================================================
# 난수 소스 / 엔진
# =============================================================================


@pytest.fixture
def basic_only_rng():
    """항상 기본 공격 구간의 값을 반환"""
    return FixedRandom([0.99])


@pytest.fixture
def engine():
    return BattleEngine(RandomSource(seed=42))


# =============================================================================
# 캐릭터
# =============================================================================


@pytest.fixture
def make_character():
    def _make(character_id, name, kind, team=None, level=1, **fields):
        character = Character(id=character_id, name=name, kind=CharacterKind(kind), team=team, level=level)
        character.reset_derived_stats()
        character.restore_health()
        for key, value in fields.items():
            setattr(character, key, value)
        return character
    return _make


@pytest.fixture
def hero(make_character):
    return make_character(1, "Superman", "hero")


@pytest.fixture
def villain(make_character):
    return make_character(2, "Lex Luthor", "villain")


# =============================================================================
# 저장소 / 서비스
# =============================================================================


@pytest.fixture
def character_repo(tmp_path):
    return JsonCharacterRepository(str(tmp_path))


@pytest.fixture
def fight_repo(tmp_path):
    return JsonFightRepository(str(tmp_path))


@pytest.fixture
def roster(character_repo, make_character):
    """완성된 두 팀 (JUSTICE 영웅, LEGION 빌런) 과 팀이 없는 캐릭터 2명"""
    characters = [
        make_character(1, "Superman", "hero", team="JUSTICE"),
        make_character(2, "Batman", "hero", team="JUSTICE"),
        make_character(3, "Wonder Woman", "hero", team="JUSTICE"),
        make_character(4, "Lex Luthor", "villain", team="LEGION"),
        make_character(5, "Joker", "villain", team="LEGION"),
        make_character(6, "Cheetah", "villain", team="LEGION"),
        make_character(7, "Flash", "hero"),
        make_character(8, "Bane", "villain"),
    ]
    character_repo.replace_all(characters)
    return characters


@pytest.fixture
def fight_service(character_repo, fight_repo, engine):
    return FightService(character_repo, fight_repo, engine, win_experience=40, loss_experience=25)


# =============================================================================
# API 클라이언트
# =============================================================================


@pytest.fixture
def client(tmp_path, character_repo, fight_repo, engine):
    from arena.main import app
    from arena.api.fights import get_battle_engine
    from arena.utils.database import get_db, get_character_repository, get_fight_repository

    db_engine = create_engine(
        f"sqlite:///{tmp_path / 'users.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=db_engine)
    TestingSession = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_character_repository] = lambda: character_repo
    app.dependency_overrides[get_fight_repository] = lambda: fight_repo
    app.dependency_overrides[get_battle_engine] = lambda: engine

    yield TestClient(app)

    app.dependency_overrides.clear()
    db_engine.dispose()


@pytest.fixture
def auth_headers(client):
    response = client.post("/users/register", json={"name": "admin", "password": "1234"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
