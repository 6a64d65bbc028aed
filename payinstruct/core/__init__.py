"""Core Layer - pure instruction parsing and settlement logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All functions are deterministic; the current date is always passed in

Design Decisions:
    - Functional core separated from imperative shell: the HTTP handler and
      payload checks live in services/ and api/
"""
