"""ORM entities for policies and their renewal terms."""

from .base import Base, TimestampMixin, as_utc, utcnow
from .policy import Policy, PolicyTerm, TermStatus

__all__ = [
    "Base",
    "Policy",
    "PolicyTerm",
    "TermStatus",
    "TimestampMixin",
    "as_utc",
    "utcnow",
]
