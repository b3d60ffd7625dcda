from dataclasses import dataclass

import numpy as np


# Plies searched by the computer opponent
SEARCH_DEPTH = 5

# Heuristic weights for evaluation
WEIGHT_WIN = 10_000
WEIGHT_PIECE = 1
WEIGHT_MOBILITY = 5

# Classic Othello square values, indexed [y, x].
# Corners are stable; X- and C-squares next to an empty corner give it away.
POSITION_WEIGHTS = np.array(
    [
        [100, -20, 10,  5,  5, 10, -20, 100],
        [-20, -50, -2, -2, -2, -2, -50, -20],
        [ 10,  -2,  1,  1,  1,  1,  -2,  10],
        [  5,  -2,  1,  0,  0,  1,  -2,   5],
        [  5,  -2,  1,  0,  0,  1,  -2,   5],
        [ 10,  -2,  1,  1,  1,  1,  -2,  10],
        [-20, -50, -2, -2, -2, -2, -50, -20],
        [100, -20, 10,  5,  5, 10, -20, 100],
    ],
    dtype=np.int32,
)
POSITION_WEIGHTS.setflags(write=False)


@dataclass(frozen=True)
class SearchConfig:
    depth: int = SEARCH_DEPTH
    use_positional: bool = True
    use_mobility: bool = True
