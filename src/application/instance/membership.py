"""Membership Fetcher: complete, optionally filtered, ASG membership."""
import logging
from typing import Iterable, List, Optional, Union

from src.domain.base.ports import MembershipPort
from src.domain.instance.value_objects import MembershipRecord

GroupNameFilter = Optional[Union[str, Iterable[str]]]


def parse_group_names(value: GroupNameFilter) -> List[str]:
    """
    Parse a group name filter into a list of exact names.

    Accepts a comma-separated string (``"web,worker"``) or an iterable of
    strings, each of which may itself contain commas. Empty entries (from
    stray commas) are dropped; names are otherwise kept verbatim.
    """
    if not value:
        return []
    parts = value.split(",") if isinstance(value, str) else [
        part for item in value for part in item.split(",")
    ]
    return [part for part in parts if part]


class MembershipFetcher:
    """Retrieves every membership record of a region, one page at a time."""

    def __init__(self, membership_port: MembershipPort):
        self._port = membership_port
        self._logger = logging.getLogger(__name__)

    def fetch_membership(self, region: str,
                         group_name_filter: GroupNameFilter = None) -> List[MembershipRecord]:
        """
        Fetch all membership records of a region.

        Pages are requested until the provider returns no continuation token.
        Group names in the filter match exactly and case-sensitively.

        Args:
            region: AWS region to query
            group_name_filter: Comma-separated names, or an iterable of names;
                empty means every group

        Returns:
            Records in arrival order

        Raises:
            AWSError: If any page request fails
        """
        records: List[MembershipRecord] = []
        token: Optional[str] = None
        pages = 0
        while True:
            page = self._port.list_group_members(region, token)
            pages += 1
            records.extend(page.records)
            self._logger.debug(f"Membership page {pages}: {len(page.records)} records")
            if not page.has_more:
                break
            token = page.next_token

        names = parse_group_names(group_name_filter)
        if not names:
            self._logger.info(f"Found {len(records)} instances in {pages} page(s) in {region}")
            return records

        wanted = set(names)
        filtered = [record for record in records if record.group_name in wanted]
        self._logger.info(
            f"Found {len(filtered)} of {len(records)} instances in groups {', '.join(names)}"
        )
        return filtered
