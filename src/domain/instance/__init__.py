"""Instance bounded context: fleet members, their ages and how many to pick."""

from .ranking import instance_age, rank_by_age
from .selection import select_instances
from .value_objects import (
    EnrichedInstance,
    ExactCount,
    MembershipPage,
    MembershipRecord,
    Percentage,
    RankDirection,
    SelectAll,
    SelectionPolicy,
)

__all__ = [
    "MembershipRecord",
    "MembershipPage",
    "EnrichedInstance",
    "RankDirection",
    "SelectionPolicy",
    "ExactCount",
    "Percentage",
    "SelectAll",
    "instance_age",
    "rank_by_age",
    "select_instances",
]
