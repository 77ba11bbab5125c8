"""Infrastructure Layer — storage adapters and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; it never holds business rules
    - All storage failures mapped to core/errors.py types
"""
