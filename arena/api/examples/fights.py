# POST /fights 요청 예시
DUEL_REQUEST_EXAMPLE = {
  "id1": 1,
  "id2": 4
}

# POST /fights 응답 예시 (turn_log 일부)
DUEL_RESPONSE_EXAMPLE = {
  "fight_id": 1,
  "character_a": {
    "id": 1,
    "name": "Superman",
    "city": "Metropolis",
    "kind": "hero",
    "team": None,
    "level": 1,
    "experience": 40,
    "shield": 0,
    "max_health": 100,
    "health": 18.0,
    "ultimate_charge": 98,
    "ultimate_threshold": 150,
    "ultimate_ready": False
  },
  "character_b": {
    "id": 4,
    "name": "Lex Luthor",
    "city": "Metropolis",
    "kind": "villain",
    "team": None,
    "level": 1,
    "experience": 25,
    "shield": 0,
    "max_health": 100,
    "health": 0.0,
    "ultimate_charge": 82,
    "ultimate_threshold": 150,
    "ultimate_ready": False
  },
  "winner": "Superman",
  "turn_log": [
    {
      "turn": 1,
      "attacker": "Superman",
      "defender": "Lex Luthor",
      "move": "critical",
      "damage": 45,
      "is_ultimate": False,
      "health_before": 100.0,
      "health_after": 55.0,
      "message": "Superman이(가) Lex Luthor을(를) 공격: 치명타 (45 피해) (체력: 100.00 → 55.00)"
    }
  ]
}

# POST /fights/teams 요청 예시
TEAM_BATTLE_REQUEST_EXAMPLE = {
  "team_a": "LIGADELAJUSTICIA",
  "team_b": "LEGIONDELMAL",
  "mode": "scripted",
  "rounds": [
    {"attacker": "A", "move": "critical"},
    {"attacker": "B", "move": "special"},
    {"attacker": "A", "move": "basic"}
  ]
}

# POST /fights/teams/continue 요청 예시
TEAM_BATTLE_CONTINUE_REQUEST_EXAMPLE = {
  "fight_id": 2,
  "rounds": [
    {"attacker": "A", "move": "critical"}
  ]
}

# API 문서용 설명 텍스트

DUEL_DESCRIPTION = """
1:1 전투 API - 영웅 한 명과 빌런 한 명의 전투를 시뮬레이션

- **id1**: 먼저 공격하는 캐릭터 ID
- **id2**: 상대 캐릭터 ID
- 승자는 경험치 40, 패자는 25를 얻으며 결과가 캐릭터에 저장됩니다.
"""

TEAM_BATTLE_DESCRIPTION = """
팀 전투 API - 영웅 팀 3명과 빌런 팀 3명의 전투

- **mode=simulated**: 선두끼리 1:1 전투(방어막, 궁극기 포함)를 반복, 한 팀이 전멸할 때까지 진행 (max_rounds 로 제한 가능)
- **mode=scripted**: rounds 에 지정한 공격 진영(A/B)과 기술(basic -5, special -30, critical -45)을 순서대로 적용
- 결과: "Team A wins" / "Team B wins" / "inconclusive"
"""

TEAM_BATTLE_CONTINUE_DESCRIPTION = """
팀 전투 이어하기 API - 저장된 마지막 라운드의 체력 상태에서 전투를 계속 진행

- **fight_id**: 이어서 진행할 전투 ID
- **rounds**: 스크립트 모드의 추가 라운드
- **max_rounds**: 시뮬레이션 모드의 최대 라운드 수
"""
