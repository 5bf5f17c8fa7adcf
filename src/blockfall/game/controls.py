from __future__ import annotations

from typing import Dict, Optional

from .core import Action


# Keyed by pygame.key.name() spelling.
KEY_TO_ACTION: Dict[str, Action] = {
    "left": Action.LEFT,
    "right": Action.RIGHT,
    "down": Action.DOWN,
    "up": Action.ROTATE,
    "space": Action.DROP,
}


def action_for_key(name: str) -> Optional[Action]:
    return KEY_TO_ACTION.get(name.lower())
