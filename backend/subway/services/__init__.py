"""Services Layer — line and station use cases around the pure segment chain.

Invariants:
    - Chain rules live in core/sections.py; services only load, apply, and persist
    - Each mutating use case commits once, after the core accepted the change

Design Decisions:
    - Plain async functions over AsyncSession: routes stay thin and tests can call
      services directly with a test session
"""
