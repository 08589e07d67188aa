"""
Console helpers shared by the game driver and the track renderer.

Nothing in here is allowed to abort a race: failures are printed and the
caller carries on.
"""

from __future__ import annotations

import os
import subprocess
import sys
import time
from typing import Callable, Optional, TextIO

ANSI_CLEAR = "\033[H\033[2J"
PLAY_AGAIN_PROMPT = "Play Again: (y/n): "


def clear_console(out: Optional[TextIO] = None) -> None:
    """Clears the terminal: `cls` through cmd on Windows, ANSI escapes elsewhere."""
    out = out or sys.stdout
    try:
        if os.name == "nt":
            subprocess.run(["cmd", "/c", "cls"], check=True)
        else:
            out.write(ANSI_CLEAR)
            out.flush()
    except (OSError, subprocess.SubprocessError) as e:
        print(f"Warning: Could not clear the console: {e}")


def pause_for(seconds: float, sleep: Callable[[float], None] = time.sleep) -> None:
    if seconds <= 0:
        return
    try:
        sleep(seconds)
    except InterruptedError:
        # Woken early; the next tick simply starts sooner.
        pass


def ask_play_again(input_fn: Callable[[str], str] = input) -> bool:
    """
    Prompts for a rematch. Anything other than a literal 'n' means play again;
    a closed stdin counts as 'n'.
    """
    try:
        answer = input_fn(PLAY_AGAIN_PROMPT)
    except EOFError:
        return False
    return answer.strip() != "n"
