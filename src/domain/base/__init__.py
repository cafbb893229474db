"""Base domain layer - shared kernel for all bounded contexts."""

from .ports import InstanceDescriptionPort, MembershipPort

__all__ = [
    "MembershipPort",
    "InstanceDescriptionPort",
]
