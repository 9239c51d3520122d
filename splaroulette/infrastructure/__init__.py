"""Infrastructure Layer - external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core state machines, only types and errors
    - All external failures mapped to core/errors.py types
"""
