"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services receive their repository by injection; none import the ORM
    - Business failures raised as core/errors.py types, mapped to HTTP by api/
"""
