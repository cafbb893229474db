"""Instance Enricher: joins membership with EC2 launch times."""
import logging
from typing import Dict, List, Sequence

from src.domain.base.ports import InstanceDescriptionPort
from src.domain.instance.value_objects import EnrichedInstance, MembershipRecord


class InstanceEnricher:
    """Looks up launch times for fleet members."""

    def __init__(self, instance_port: InstanceDescriptionPort):
        self._port = instance_port
        self._logger = logging.getLogger(__name__)

    def enrich(self, region: str, instance_ids: Sequence[str]) -> List[EnrichedInstance]:
        """
        Describe the given instances with a single batched request.

        Ids missing from the response are dropped; the two AWS APIs are only
        eventually consistent with each other.

        Args:
            region: AWS region to query
            instance_ids: Instance ids in membership order

        Returns:
            Enriched instances in the order of ``instance_ids``; empty without
            any request when ``instance_ids`` is empty

        Raises:
            AWSError: If the describe request fails
        """
        if not instance_ids:
            return []

        ids = list(dict.fromkeys(instance_ids))
        described: Dict[str, EnrichedInstance] = {}
        for instance in self._port.describe_instances(region, ids):
            described.setdefault(instance.instance_id, instance)

        missing = [instance_id for instance_id in ids if instance_id not in described]
        if missing:
            self._logger.warning(
                f"Dropping {len(missing)} instance(s) with no EC2 description: {', '.join(missing)}"
            )
        return [described[instance_id] for instance_id in ids if instance_id in described]

    def enrich_records(self, region: str,
                       records: Sequence[MembershipRecord]) -> List[EnrichedInstance]:
        """Enrich membership records, carrying each record's group name along."""
        groups = {record.instance_id: record.group_name for record in records}
        return [
            instance.with_group(groups.get(instance.instance_id))
            for instance in self.enrich(region, [record.instance_id for record in records])
        ]
