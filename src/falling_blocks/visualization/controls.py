from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple, Union

from falling_blocks.game import Action, FallingBlocksGame


class HostCommand(str, Enum):
    START = "start"
    TOGGLE_PAUSE = "toggle-pause"
    TOGGLE_GHOST = "toggle-ghost"
    TOGGLE_HARD_DROP = "toggle-hard-drop"
    TOGGLE_JK = "toggle-jk"


ControlAction = Union[Action, HostCommand]


@dataclass(frozen=True)
class ControlBinding:
    action: ControlAction
    description: str
    keys: Tuple[str, ...]
    display: Tuple[str, ...]


def build_control_bindings(swap_jk: bool = False) -> List[ControlBinding]:
    """Key bindings using pygame key names (``pygame.key.name``)."""
    ccw_letter, cw_letter = ("k", "j") if swap_jk else ("j", "k")
    return [
        ControlBinding(Action.MOVE_LEFT, "Move Left", ("left", "a"), ("←", "A")),
        ControlBinding(Action.MOVE_RIGHT, "Move Right", ("right", "d"), ("→", "D")),
        ControlBinding(Action.SOFT_DROP, "Soft Drop", ("down", "s"), ("↓", "S")),
        ControlBinding(Action.HARD_DROP, "Hard Drop", ("space",), ("Space",)),
        ControlBinding(Action.ROTATE_CCW, "Rotate Counter-Clockwise", ("z", ccw_letter), ("Z", ccw_letter.upper())),
        ControlBinding(Action.ROTATE_CW, "Rotate Clockwise", ("up", "x", cw_letter), ("↑", "X", cw_letter.upper())),
        ControlBinding(Action.ROTATE_180, "Rotate 180°", ("c",), ("C",)),
        ControlBinding(Action.HOLD, "Hold Piece", ("left shift", "right shift"), ("Shift",)),
        ControlBinding(HostCommand.TOGGLE_PAUSE, "Pause / Resume", ("p", "escape"), ("P", "Esc")),
        ControlBinding(HostCommand.START, "Start New Game", ("return",), ("Enter",)),
        ControlBinding(HostCommand.TOGGLE_GHOST, "Toggle Ghost Piece", ("g",), ("G",)),
        ControlBinding(HostCommand.TOGGLE_HARD_DROP, "Toggle Hard Drop", ("h",), ("H",)),
        ControlBinding(HostCommand.TOGGLE_JK, "Swap J/K Rotation", ("r",), ("R",)),
    ]


def normalize_key(key: str) -> str:
    if len(key) == 1:
        return key.lower()
    return key


def create_key_map(bindings: List[ControlBinding]) -> Dict[str, ControlAction]:
    key_map: Dict[str, ControlAction] = {}
    for binding in bindings:
        for key in binding.keys:
            key_map[normalize_key(key)] = binding.action
    return key_map


def apply_host_command(command: HostCommand, game: FallingBlocksGame) -> None:
    """Run a command that is not a game action against the session."""
    if command == HostCommand.START:
        game.start()
    elif command == HostCommand.TOGGLE_PAUSE:
        game.handle_action(Action.RESUME if game.is_paused else Action.PAUSE)
    elif command == HostCommand.TOGGLE_GHOST:
        game.settings.toggle_ghost_piece()
    elif command == HostCommand.TOGGLE_HARD_DROP:
        game.settings.toggle_hard_drop()
    elif command == HostCommand.TOGGLE_JK:
        game.settings.toggle_jk_rotation()
