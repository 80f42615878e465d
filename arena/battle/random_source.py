import random
from typing import Optional

class RandomSource:
    """전투용 난수 래퍼

    - seed 를 지정하면 재현 가능한 전투 결과
    - 테스트에서는 rng 를 교체해서 기술 선택을 고정
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def random(self) -> float:
        """[0, 1) 균등 분포 값"""
        return self._rng.random()

    def chance(self, probability: float) -> bool:
        return self.random() < probability
