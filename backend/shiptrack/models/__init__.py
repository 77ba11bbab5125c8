"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Shipment is the only persisted entity

Design Decisions:
    - Models imported here so Base.metadata is populated on package import
"""

from shiptrack.models.shipment import Shipment  # noqa: F401
