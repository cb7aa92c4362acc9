"""Random pass identifiers of the form ``<PREFIX>-<8 digits>``."""

import random
from typing import Optional

PASS_NUMBER_MIN = 10_000_000
PASS_NUMBER_MAX = 99_999_999


class PassIdGenerator:
    """Draws uniformly from the 8-digit range. Uniqueness is the store's job."""

    def __init__(self, prefix: str = "TSRTC", rng: Optional[random.Random] = None):
        self.prefix = prefix
        self.rng = rng or random.SystemRandom()

    def generate(self) -> str:
        return f"{self.prefix}-{self.rng.randint(PASS_NUMBER_MIN, PASS_NUMBER_MAX)}"
