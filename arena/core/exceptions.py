from typing import Optional

class NotFoundError(ValueError):
    """캐릭터, 팀, 전투 기록을 찾을 수 없는 경우"""

class InvalidMatchupError(ValueError):
    """같은 타입끼리의 대결이거나 팀 구성이 올바르지 않은 경우"""

class InvalidMoveSpecError(ValueError):
    """스크립트 라운드에 알 수 없는 공격 진영이나 기술이 포함된 경우

    이미 적용된 라운드는 되돌리지 않는다. round_number 는 실패한 라운드 번호,
    fight_id 는 부분 결과가 저장된 전투 기록이다.
    """

    def __init__(self, message: str, round_number: int, fight_id: Optional[int] = None):
        super().__init__(message)
        self.round_number = round_number
        self.fight_id = fight_id
