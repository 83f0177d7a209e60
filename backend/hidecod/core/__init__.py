"""Core Layer — pure decision logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure, deterministic, and total over their inputs

Design Decisions:
    - Functional core separated from imperative shell: the same code runs inside
      the function host and behind the admin API
"""
