"""Conflict marker tokens.

These are written byte-exact and must not be localized.
"""

from typing import Final

OURS_MARKER: Final = "<<<<<<< HEAD"
SEPARATOR_MARKER: Final = "======="
THEIRS_MARKER: Final = ">>>>>>> branch"

LINE_SEPARATOR: Final = "\n"
