"""ANSI color codes for terminal output.

All colors use the 256-color palette.

Usage:
    from stencil_core.logging.colors import CYAN, RESET

    print(f"{CYAN}Context resolved{RESET}")
"""

RESET = "\033[0m"

# Level colors
RED = "\033[38;5;196m"  # Errors - bright red
YELLOW = "\033[38;5;226m"  # Warnings - bright yellow
CYAN = "\033[38;5;51m"  # Info - cyan
LIGHT_BLUE = "\033[38;5;153m"  # Debug and context data - light blue

# Component colors
GREEN = "\033[38;5;82m"  # context
ORANGE = "\033[38;5;208m"  # normalize
MAGENTA = "\033[38;5;201m"  # engine

__all__ = [
    "RESET",
    "RED",
    "YELLOW",
    "CYAN",
    "LIGHT_BLUE",
    "GREEN",
    "ORANGE",
    "MAGENTA",
]
