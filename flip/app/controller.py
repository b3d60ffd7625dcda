from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flip.app.orchestrator import GameOrchestrator
from flip.cli.commands import Command, CommandProcessor, CommandType
from flip.cli.input_poller import InputPoller
from flip.cli.view import CliView, Message, MessageType
from flip.core.board import Player, Position
from flip.core.gamestate import GameState


@dataclass(frozen=True)
class ControllerConfig:
    tick_sec: float = 0.2
    human_color: Player = Player.BLACK


class GameController:
    """
    Terminal session of a human against the computer.

    Every tick the controller takes the states the orchestrator published
    since the last tick, redraws if anything changed and then waits up to
    tick_sec for a line of input. Moves and /restart go to the orchestrator;
    the rules and the computer's turns never run on this thread.
    """

    def __init__(
        self,
        *,
        config: ControllerConfig = ControllerConfig(),
        orchestrator: Optional[GameOrchestrator] = None,
        view: Optional[CliView] = None,
        poller: Optional[InputPoller] = None,
    ) -> None:
        self.config = config
        self.orchestrator = orchestrator or GameOrchestrator(
            computer_player=config.human_color.opponent()
        )
        self.view = view or CliView(you_color=config.human_color)
        self.commands = CommandProcessor()
        self._poller = poller

        self._state: GameState = self.orchestrator.latest
        self._running = True
        self._dirty = True
        self._shown_thinking = False

    @property
    def state(self) -> GameState:
        """The snapshot currently on screen."""
        return self._state

    @property
    def you_color(self) -> Player:
        return self.config.human_color

    @property
    def running(self) -> bool:
        return self._running

    # ---------- Loop ----------

    def run(self) -> None:
        poller = self._poller or InputPoller()
        self.orchestrator.start()
        self.view.set_restart(f"New game. You play {self.you_color}.")
        try:
            while self._running:
                self.sync()
                self._redraw()
                line = poller.poll_line(timeout_sec=self.config.tick_sec)
                if line is not None:
                    self.handle_line(line)
            # show the farewell message
            self._redraw()
        finally:
            self.orchestrator.close(timeout=1.0)

    def sync(self) -> None:
        """Take over every newly published state, oldest first."""
        for state in self.orchestrator.poll_states():
            move = state.last_move
            if move is not None and move.player != self.you_color:
                self.view.set_move(str(move.position), is_you=False)
            self._state = state
            self._dirty = True

        thinking = self.orchestrator.is_thinking
        if thinking != self._shown_thinking:
            self._shown_thinking = thinking
            self._dirty = True

    def _redraw(self) -> None:
        if self._dirty:
            self.view.render(self._state, thinking=self._shown_thinking)
            self._dirty = False

    # ---------- Input ----------

    def handle_line(self, line: str) -> None:
        parsed = self.commands.parse(line)
        self._dirty = True
        if not parsed.ok:
            # a blank line has no error and changes nothing
            if parsed.error:
                self.view.set_error(parsed.error)
            return
        if parsed.command is not None:
            self._run_command(parsed.command)
        elif parsed.position is not None:
            self._play(parsed.position)

    def _run_command(self, command: Command) -> None:
        if command.type == CommandType.HELP:
            self.view.set_info(self.commands.help_text())
        elif command.type == CommandType.RESTART:
            self.orchestrator.restart()
            self.view.set_restart("Game restarted.")
        elif command.type == CommandType.QUIT:
            self.view.set_message(Message(MessageType.QUIT, "Exiting..."))
            self._running = False

    def _play(self, pos: Position) -> None:
        result = self.orchestrator.attempt_move(pos.x, pos.y)
        if result.success:
            self.view.set_move(str(pos), is_you=True)
        else:
            self.view.set_error(result.error_message)
