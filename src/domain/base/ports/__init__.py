"""Domain ports for infrastructure concerns."""

from .instance_description_port import InstanceDescriptionPort
from .membership_port import MembershipPort

__all__ = [
    "MembershipPort",
    "InstanceDescriptionPort",
]
