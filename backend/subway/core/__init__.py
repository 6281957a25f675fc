"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Chain operations are deterministic given the same segment collection

Design Decisions:
    - Functional core separated from imperative shell: services load rows,
      hand plain values to Sections, and write the result back
"""
