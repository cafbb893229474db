"""Age ranking of enriched instances."""
from datetime import datetime, timedelta
from typing import Iterable, List

from src.domain.instance.value_objects import EnrichedInstance, RankDirection


def instance_age(instance: EnrichedInstance, now: datetime) -> timedelta:
    """Age of an instance relative to ``now``."""
    return now - instance.launch_time


def rank_by_age(instances: Iterable[EnrichedInstance],
                now: datetime,
                direction: RankDirection = RankDirection.OLDEST_FIRST) -> List[EnrichedInstance]:
    """
    Order instances by age.

    Every age is measured against the same ``now`` so the ordering is
    reproducible for a given invocation. The sort is stable: instances with
    equal launch times keep their input order in both directions.

    Args:
        instances: Instances to rank
        now: Reference instant, captured once by the caller
        direction: OLDEST_FIRST (largest age first) or NEWEST_FIRST

    Returns:
        A new list in rank order
    """
    return sorted(
        instances,
        key=lambda instance: instance_age(instance, now),
        reverse=direction.descending_age,
    )
