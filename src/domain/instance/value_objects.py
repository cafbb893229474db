"""Instance value objects.

This module holds the immutable records that flow through one invocation:

- MembershipRecord / MembershipPage: what the autoscaling API reports
- EnrichedInstance: a member joined with its EC2 launch time
- RankDirection: which end of the age range comes first
- SelectionPolicy (ExactCount, Percentage, SelectAll): how many to keep
"""
import math
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.domain.core.exceptions import InvalidSelectionError


class MembershipRecord(BaseModel):
    """Association between an instance and the autoscaling group it belongs to."""
    model_config = ConfigDict(frozen=True)

    instance_id: str
    group_name: str

    def __str__(self) -> str:
        return f"{self.group_name}/{self.instance_id}"


class MembershipPage(BaseModel):
    """A single page returned by the membership API."""
    model_config = ConfigDict(frozen=True)

    records: List[MembershipRecord] = Field(default_factory=list)
    next_token: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return bool(self.next_token)


class EnrichedInstance(BaseModel):
    """A fleet member with its launch time."""
    model_config = ConfigDict(frozen=True)

    instance_id: str
    launch_time: datetime
    group_name: Optional[str] = None

    def with_group(self, group_name: Optional[str]) -> "EnrichedInstance":
        return self.model_copy(update={"group_name": group_name})


class RankDirection(str, Enum):
    """Ordering of a ranked sequence."""
    OLDEST_FIRST = "oldest"
    NEWEST_FIRST = "newest"

    @property
    def descending_age(self) -> bool:
        return self is RankDirection.OLDEST_FIRST


class SelectionPolicy(BaseModel, ABC):
    """How many ranked instances to keep.

    Exactly one policy applies per invocation. When built from command line
    flags, an exact count wins over a percentage, and a percentage wins over
    "all"; see from_flags().
    """
    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def limit(self, length: int) -> int:
        """Number of leading elements to keep out of ``length``."""

    @staticmethod
    def from_flags(count: int = 0, percentage: float = 0.0) -> "SelectionPolicy":
        """
        Build a policy from raw flag values where zero means "not set".

        Args:
            count: Exact number of instances (0 = not set)
            percentage: Fraction of instances in (0, 1] (0.0 = not set)

        Returns:
            ExactCount if count is set, else Percentage if percentage is set,
            else SelectAll.

        Raises:
            InvalidSelectionError: If the chosen value is out of range
        """
        if count:
            try:
                return ExactCount(count=count)
            except ValidationError as e:
                raise InvalidSelectionError("count", count, "must be a positive integer") from e
        if percentage:
            try:
                return Percentage(percentage=percentage)
            except ValidationError as e:
                raise InvalidSelectionError("percentage", percentage, "must be in (0, 1]") from e
        return SelectAll()


class ExactCount(SelectionPolicy):
    count: int

    @field_validator("count")
    @classmethod
    def validate_count(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("count must be positive")
        return v

    def limit(self, length: int) -> int:
        return min(self.count, length)


class Percentage(SelectionPolicy):
    percentage: float

    @field_validator("percentage")
    @classmethod
    def validate_percentage(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError("percentage must be in (0, 1]")
        return v

    def limit(self, length: int) -> int:
        k = math.floor(self.percentage * length)
        # never select nothing from a non-empty fleet
        if k == 0 and length > 0:
            k = 1
        return k


class SelectAll(SelectionPolicy):

    def limit(self, length: int) -> int:
        return length
