"""Domain port for autoscaling group membership."""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.instance.value_objects import MembershipPage


class MembershipPort(ABC):
    """Domain port for listing autoscaling group members one page at a time."""

    @abstractmethod
    def list_group_members(self, region: str,
                           continuation_token: Optional[str] = None) -> MembershipPage:
        """
        Return one page of membership records for a region.

        A page with an empty ``next_token`` is the last one.
        """
