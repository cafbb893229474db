"""Selection of a ranked prefix."""
from typing import List, Sequence

from src.domain.instance.value_objects import EnrichedInstance, SelectionPolicy


def select_instances(ranked: Sequence[EnrichedInstance],
                     policy: SelectionPolicy) -> List[EnrichedInstance]:
    """Return the leading ``policy.limit(len(ranked))`` instances, in rank order."""
    return list(ranked[:policy.limit(len(ranked))])
