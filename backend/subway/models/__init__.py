"""ORM Models — SQLAlchemy declarative models for stations, lines and sections.

Invariants:
    - All models inherit from Base (db/base.py)
    - Line is the aggregate root; its sections are deleted with it

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from subway.models.station import Station  # noqa: F401
from subway.models.line import Line  # noqa: F401
from subway.models.section import Section  # noqa: F401
