"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - StationId, LineId, SectionId wrap UUIDs — never use bare UUID in domain logic
    - Distance is a strictly positive integer on every stored segment

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

StationId = NewType("StationId", UUID)
LineId = NewType("LineId", UUID)
SectionId = NewType("SectionId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Distance = NewType("Distance", int)   # > 0 on a stored segment


# ─── Enums ───────────────────────────────────────────────────────

class ChainPosition(str, Enum):
    """Where a station sits on a line — decides how removal splices the chain."""
    HEAD = "head"
    INTERIOR = "interior"
    TAIL = "tail"


class SplitKind(str, Enum):
    """How an inserted segment relates to the existing chain."""
    FRONT = "front"      # shares the up station of an existing segment
    BACK = "back"        # shares the down station of an existing segment
    EXTEND = "extend"    # attaches at the head or tail, nothing shrinks
