"""
Domain Layer

This domain layer is organized by bounded contexts:
- base/: Shared kernel with the ports the infrastructure implements
- core/: Exceptions shared by every context
- instance/: Fleet members, age ranking and selection policies
"""

from .core.exceptions import DomainException, ValidationError
from .instance import (
    EnrichedInstance,
    MembershipRecord,
    RankDirection,
    SelectionPolicy,
)

__all__ = [
    "DomainException",
    "ValidationError",
    "MembershipRecord",
    "EnrichedInstance",
    "RankDirection",
    "SelectionPolicy",
]
