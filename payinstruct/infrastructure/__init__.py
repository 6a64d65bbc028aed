"""Infrastructure Layer - cross-cutting concerns (logging, clock).

Invariants:
    - Infrastructure never imports from core/ domain logic
"""
