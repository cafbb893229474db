"""Instance application services."""

from .enrichment import InstanceEnricher
from .membership import MembershipFetcher, parse_group_names
from .service import InstanceAgeService

__all__ = [
    "MembershipFetcher",
    "InstanceEnricher",
    "InstanceAgeService",
    "parse_group_names",
]
