from __future__ import annotations

import math
import random
from typing import Callable, List

from .pieces import TETROMINO_KEYS, TetrominoType


RandomSource = Callable[[], float]


def create_bag(random_source: RandomSource = random.random) -> List[TetrominoType]:
    """Return one shuffled permutation of all seven piece types.

    Fisher-Yates driven by ``random_source``, which must return floats in
    [0, 1). Passing a fixed source gives a fixed permutation.
    """
    bag = list(TETROMINO_KEYS)
    for i in range(len(bag) - 1, 0, -1):
        j = math.floor(random_source() * (i + 1))
        bag[i], bag[j] = bag[j], bag[i]
    return bag
