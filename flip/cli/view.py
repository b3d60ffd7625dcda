"""Text rendering of a GameState for the terminal."""
from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from flip.core.board import Player
from flip.core.gamestate import GameState


class MessageType(Enum):
    ERR = "ERR"
    INFO = "INFO"
    YOU_MOVE = "YOU MOVE"
    CPU_MOVE = "CPU MOVE"
    RESTART = "RESTART"
    QUIT = "QUIT"


@dataclass(frozen=True)
class Message:
    """One status line under the board, e.g. "[CPU MOVE] F5"."""
    type: MessageType
    text: str = ""

    def render(self) -> str:
        tag = f"[{self.type.value}]"
        return f"{tag} {self.text}" if self.text else tag


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


class CliView:
    """
    Draws a snapshot and nothing else: the board (the human's legal moves
    marked '*' when it is their turn), the current message, the score line
    and whose turn it is or how the game ended.
    """

    def __init__(
        self,
        *,
        you_color: Player = Player.BLACK,
        cpu_name: str = "CPU",
        prompt: str = "> ",
        clear: bool = True,
    ) -> None:
        self.you_color = you_color
        self.cpu_color = you_color.opponent()
        self.cpu_name = cpu_name
        self.prompt = prompt
        self.clear = clear
        self._message: Optional[Message] = None

    @property
    def message(self) -> Optional[Message]:
        return self._message

    def set_message(self, msg: Optional[Message]) -> None:
        self._message = msg

    def _say(self, kind: MessageType, text: str) -> None:
        # an empty text clears the line
        self._message = Message(kind, text) if text else None

    def set_error(self, text: str) -> None:
        self._message = Message(MessageType.ERR, text)

    def set_info(self, text: str = "") -> None:
        self._say(MessageType.INFO, text)

    def set_move(self, text: str = "", is_you: bool = False) -> None:
        self._say(MessageType.YOU_MOVE if is_you else MessageType.CPU_MOVE, text)

    def set_restart(self, text: str = "") -> None:
        self._message = Message(MessageType.RESTART, text)

    def render(self, state: GameState, thinking: bool = False) -> None:
        if self.clear:
            clear_screen()
        print(self.render_text(state, thinking))
        print(self.prompt, end="", flush=True)

    def render_text(self, state: GameState, thinking: bool = False) -> str:
        your_turn = not state.is_terminal and state.current_player == self.you_color
        marks = state.board.legal_moves(self.you_color) if your_turn else ()

        lines: List[str] = [
            state.board.to_cli(marks),
            "",
            self._message.render() if self._message is not None else "",
            self._score_line(state),
            self._status_line(state, thinking),
        ]
        if state.is_terminal:
            lines.append("Type /restart for a new game or /quit to exit.")
        return "\n".join(lines)

    def _score_line(self, state: GameState) -> str:
        return (
            f"{Player.BLACK.symbol()} black: {state.black_score}   "
            f"{Player.WHITE.symbol()} white: {state.white_score}   "
            f"(you: {self.you_color}, {self.cpu_name}: {self.cpu_color})"
        )

    def _status_line(self, state: GameState, thinking: bool) -> str:
        result = state.result
        if result is not None:
            if result.winner == self.you_color:
                return f"☆ YOU WON ☆  {result}"
            if result.winner == self.cpu_color:
                return f"♨ YOU LOST ♨  {result}"
            return f"GAME OVER  {result}"

        if state.current_player == self.you_color:
            return ">>> YOUR TURN <<<"
        if thinking:
            return f">>> {self.cpu_name} THINKING... <<<"
        return f">>> {self.cpu_name} TURN <<<"
