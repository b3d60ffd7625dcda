from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from flip.ai.reversi_ai import ReversiAI
from flip.core.board import Player, Position
from flip.core.gamestate import GameState
from flip.core.move import Move, MoveResult
from flip.core.movevalidator import MoveValidator

logger = logging.getLogger(__name__)

RESTART_PENDING = "New game is starting."


class EventType(Enum):
    MOVE = "move"                # human move attempt
    RESTART = "restart"          # new game (also used for the initial state)
    SEARCH_DONE = "search_done"  # a computer search finished
    STOP = "stop"


@dataclass(frozen=True)
class GameEvent:
    """
    One input to the orchestrator loop.

    state is the predecessor for MOVE events, the replacement state for
    RESTART events and the searched state for SEARCH_DONE events, whose
    search holds the finished future. generation is the restart count when
    the event was issued.
    """
    type: EventType
    generation: int
    state: Optional[GameState] = None
    position: Optional[Position] = None
    search: Optional["Future[Optional[Position]]"] = None


class GameOrchestrator:
    """
    Turns human moves and restarts into one ordered stream of GameStates.

    A single worker thread consumes events in order and publishes the state
    each accepted event produces. When the computer is to play it starts a
    search and goes back to the queue; the finished search arrives as a
    SEARCH_DONE event, so a restart is handled while a search is running.
    Events and searches from before a restart are dropped when they arrive.

    Consumers read published states with poll_states()/wait_for_state() and
    inspect `latest` for the state currently on screen.
    """

    def __init__(
        self,
        *,
        computer_player: Player = Player.WHITE,
        ai: Optional[ReversiAI] = None,
        initial_state: Optional[GameState] = None,
    ) -> None:
        self.computer_player = computer_player
        self.human_player = computer_player.opponent()
        self.ai = ai or ReversiAI(player=computer_player)
        self.validator = MoveValidator()

        self._initial_state = initial_state or GameState.new_game()
        self._latest: GameState = self._initial_state

        self._events: "queue.Queue[GameEvent]" = queue.Queue()
        self._published: "queue.Queue[GameState]" = queue.Queue()

        # guards the generation counters against publish/restart interleaving
        self._gen_lock = threading.Lock()
        self._generation = 0
        # generation of _latest; lags _generation until a restart is published
        self._latest_generation = 0

        self._thinking = threading.Event()
        self._worker = threading.Thread(target=self._run, name="flip-orchestrator", daemon=True)

    # ---------- Lifecycle ----------

    def start(self) -> None:
        """Start the worker and publish the initial state."""
        self._worker.start()
        self._events.put(GameEvent(EventType.RESTART, self._generation, state=self._initial_state))

    def close(self, timeout: Optional[float] = None) -> None:
        with self._gen_lock:
            self._generation += 1
        self._events.put(GameEvent(EventType.STOP, self._generation))
        if self._worker.is_alive():
            self._worker.join(timeout=timeout)
        self.ai.close()

    # ---------- Inputs (called from the UI thread) ----------

    @property
    def latest(self) -> GameState:
        """Most recently published state."""
        return self._latest

    @property
    def is_thinking(self) -> bool:
        return self._thinking.is_set()

    @property
    def generation(self) -> int:
        return self._generation

    def attempt_move(self, x: int, y: int) -> MoveResult:
        """
        Queue a human move against the latest published state.

        Rejected attempts publish nothing; the result explains why. Between
        restart() and the new game being published every attempt is rejected.
        """
        with self._gen_lock:
            generation = self._generation
            state = self._latest
            if self._latest_generation != generation:
                return MoveResult.fail(RESTART_PENDING)
        move = Move(Position(x, y), self.human_player)
        result = self.validator.validate(state, move)
        if not result.success:
            return result
        self._events.put(
            GameEvent(EventType.MOVE, generation, state=state, position=move.position)
        )
        return result

    def restart(self) -> None:
        """Abandon the current game; a fresh state is published next."""
        with self._gen_lock:
            self._generation += 1
            generation = self._generation
        logger.info("Restart requested (generation %d)", generation)
        self._events.put(GameEvent(EventType.RESTART, generation, state=GameState.new_game()))

    # ---------- Outputs ----------

    def poll_states(self) -> List[GameState]:
        """All states published since the last call, oldest first. Never blocks."""
        states: List[GameState] = []
        while True:
            try:
                states.append(self._published.get_nowait())
            except queue.Empty:
                return states

    def wait_for_state(self, timeout: Optional[float] = None) -> Optional[GameState]:
        """Next published state, or None if none arrives within timeout."""
        try:
            return self._published.get(timeout=timeout)
        except queue.Empty:
            return None

    # ---------- Worker ----------

    def _run(self) -> None:
        while True:
            event = self._events.get()
            if event.type == EventType.STOP:
                return
            if event.generation != self._generation:
                if event.type == EventType.SEARCH_DONE:
                    logger.debug("Discarding stale search result (generation %d)", event.generation)
                else:
                    logger.debug("Dropping stale %s event", event.type.value)
                continue

            if event.type == EventType.RESTART:
                self._thinking.clear()
                self._advance(event.state, event.generation)
            elif event.type == EventType.MOVE:
                self._on_move(event)
            elif event.type == EventType.SEARCH_DONE:
                self._on_search_done(event)

    def _on_move(self, event: GameEvent) -> None:
        if event.state is not self._latest:
            logger.debug("Dropping move %s against a superseded state", event.position)
            return
        state = event.state.update_for_move(event.position.x, event.position.y)
        if state is not event.state:
            self._advance(state, event.generation)

    def _on_search_done(self, event: GameEvent) -> None:
        self._thinking.clear()
        try:
            move = event.search.result()
        except Exception:
            logger.exception("Computer move failed; keeping the last published state")
            return
        if move is None:
            return
        self._advance(event.state.update_for_move(move.x, move.y), event.generation)

    def _advance(self, state: GameState, generation: int) -> None:
        """Publish state, then start a search if the computer is to play it."""
        if not self._publish(state, generation):
            return
        if state.is_terminal or state.current_player != self.computer_player:
            return

        def on_done(future: "Future[Optional[Position]]") -> None:
            self._events.put(
                GameEvent(EventType.SEARCH_DONE, generation, state=state, search=future)
            )

        self._thinking.set()
        try:
            future = self.ai.request_move(state)
        except Exception:
            self._thinking.clear()
            logger.exception("Could not start a computer search")
            return
        # runs at once on this thread if the future is already done
        future.add_done_callback(on_done)

    def _publish(self, state: GameState, generation: int) -> bool:
        with self._gen_lock:
            if generation != self._generation:
                return False
            self._latest = state
            self._latest_generation = generation
            self._published.put(state)
        if state.last_move is not None:
            logger.debug("Published %s", state.last_move)
        if state.is_terminal:
            logger.info(
                "Game over: %s (black %d, white %d)",
                state.result_string, state.black_score, state.white_score,
            )
        return True
