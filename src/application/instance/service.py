"""Application service that picks fleet instances by age."""
import logging
from datetime import datetime
from typing import List

from src.application.instance.enrichment import InstanceEnricher
from src.application.instance.membership import GroupNameFilter, MembershipFetcher
from src.domain.base.ports import InstanceDescriptionPort, MembershipPort
from src.domain.instance.ranking import rank_by_age
from src.domain.instance.selection import select_instances
from src.domain.instance.value_objects import EnrichedInstance, RankDirection, SelectionPolicy


class InstanceAgeService:
    """Fetches membership, enriches it, ranks by age and selects a prefix."""

    def __init__(self,
                 membership_port: MembershipPort,
                 instance_port: InstanceDescriptionPort):
        self._fetcher = MembershipFetcher(membership_port)
        self._enricher = InstanceEnricher(instance_port)
        self._logger = logging.getLogger(__name__)

    def find_instances(self,
                       region: str,
                       group_names: GroupNameFilter,
                       direction: RankDirection,
                       policy: SelectionPolicy,
                       now: datetime) -> List[EnrichedInstance]:
        """
        Run the whole pipeline for one invocation.

        Args:
            region: AWS region to query
            group_names: Group name filter; empty means every group
            direction: Rank order
            policy: How many ranked instances to keep
            now: Reference instant every age is measured against

        Returns:
            The selected instances in rank order; empty for an empty fleet

        Raises:
            AWSError: If any AWS request fails
        """
        records = self._fetcher.fetch_membership(region, group_names)
        if not records:
            self._logger.info("No autoscaling instances matched; nothing to report")
            return []

        instances = self._enricher.enrich_records(region, records)
        ranked = rank_by_age(instances, now, direction)
        selected = select_instances(ranked, policy)
        self._logger.info(
            f"Selected {len(selected)} of {len(ranked)} instances ({direction.value} first)"
        )
        return selected
