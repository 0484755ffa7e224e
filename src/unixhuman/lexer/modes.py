"""Splitter operating modes and constants.

This module defines the finite state machine modes for the number splitter
and the digit cap its scanner uses.
"""

from __future__ import annotations

from enum import Enum, auto


class SplitMode(Enum):
    """Number splitter operating modes.

    The splitter switches between modes across split calls:
    - IDLE: Scan the visible buffer for the leftmost-longest number
    - PENDING_CANDIDATE: A literal prefix was just emitted; the candidate
      behind it is already located and is emitted without rescanning
    - AWAIT_MORE: A literal prefix was just emitted and the number behind it
      reaches the end of the buffer; request more data before rescanning

    """

    IDLE = auto()
    PENDING_CANDIDATE = auto()
    AWAIT_MORE = auto()


# Digit count of the largest signed 64-bit integer (9223372036854775807)
MAX_SIGNIFICANT_DIGITS = len(str(2**63 - 1))
