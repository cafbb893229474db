"""Domain port for instance descriptions."""

from abc import ABC, abstractmethod
from typing import List

from src.domain.instance.value_objects import EnrichedInstance


class InstanceDescriptionPort(ABC):
    """Domain port for describing compute instances."""

    @abstractmethod
    def describe_instances(self, region: str, instance_ids: List[str]) -> List[EnrichedInstance]:
        """Describe the given instances, flattened into a single list.

        Ids the provider does not know about may be missing from the result.
        """
