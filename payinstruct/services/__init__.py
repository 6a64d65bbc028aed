"""Services Layer - imperative shell around the pure settlement core.

Invariants:
    - Services own payload defence, logging and dependency wiring
    - Services never reimplement grammar or business rules
"""
