from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from flip.core.board import Player, Position
from flip.core.gamestate import GameState
from flip.ai.config import SearchConfig
from flip.ai.minimax import MoveFinder


class ReversiAI:
    """
    Computer opponent for one color. Searches run on a worker thread so the
    caller only blocks when it waits on the returned Future.
    """

    def __init__(
        self,
        player: Player = Player.WHITE,
        config: SearchConfig = SearchConfig(),
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self.player = player
        self.config = config
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="flip-search"
        )

    def get_move(self, state: GameState) -> Optional[Position]:
        """Blocking search for state.board. None if the AI has no legal move."""
        return MoveFinder(self.config).find_next_move(state.board, self.player, self.config.depth)

    def request_move(self, state: GameState) -> "Future[Optional[Position]]":
        """Start a search in the background and return its Future."""
        return self._executor.submit(self.get_move, state)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True, cancel_futures=True)
