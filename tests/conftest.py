import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
import structlog

from src.domain.base.ports import InstanceDescriptionPort, MembershipPort
from src.domain.instance.value_objects import EnrichedInstance, MembershipPage, MembershipRecord
from src.helpers.logger import DetailedFormatter

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeMembershipPort(MembershipPort):
    """Serves pre-built pages, chained by "page-N" continuation tokens."""

    def __init__(self, pages: List[List[MembershipRecord]]):
        self.pages = pages or [[]]
        self.tokens_received: List[Optional[str]] = []
        self.regions_received: List[str] = []

    def list_group_members(self, region: str,
                           continuation_token: Optional[str] = None) -> MembershipPage:
        self.tokens_received.append(continuation_token)
        self.regions_received.append(region)
        index = int(continuation_token.split("-")[1]) if continuation_token else 0
        next_token = f"page-{index + 1}" if index + 1 < len(self.pages) else None
        return MembershipPage(records=self.pages[index], next_token=next_token)


class FakeInstancePort(InstanceDescriptionPort):
    """Describes instances from a fixed launch-time table."""

    def __init__(self, launch_times: Dict[str, datetime]):
        self.launch_times = launch_times
        self.calls: List[List[str]] = []

    def describe_instances(self, region: str, instance_ids: List[str]) -> List[EnrichedInstance]:
        self.calls.append(list(instance_ids))
        return [
            EnrichedInstance(instance_id=instance_id, launch_time=self.launch_times[instance_id])
            for instance_id in instance_ids
            if instance_id in self.launch_times
        ]


class FakeAWSClient(FakeMembershipPort, FakeInstancePort):
    """Both ports in one object, like the real AWSClient."""

    def __init__(self, pages: List[List[MembershipRecord]], launch_times: Dict[str, datetime]):
        FakeMembershipPort.__init__(self, pages)
        FakeInstancePort.__init__(self, launch_times)


def make_instance(instance_id: str, age: timedelta, now: datetime = NOW) -> EnrichedInstance:
    return EnrichedInstance(instance_id=instance_id, launch_time=now - age)


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    for name in ('ASG_AGE_CONFIG', 'ASG_AGE_REGION', 'ASG_AGE_ENDPOINT_URL',
                 'ASG_AGE_LOG_LEVEL', 'ASG_AGE_LOG_FILE'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo setup_logging() so handlers never outlive a test's captured streams."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if isinstance(handler.formatter, DetailedFormatter):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def instance_factory():
    return make_instance


@pytest.fixture
def membership_port_factory():
    return FakeMembershipPort


@pytest.fixture
def instance_port_factory():
    return FakeInstancePort


@pytest.fixture
def fake_aws_client_factory():
    return FakeAWSClient


@pytest.fixture
def three_group_fleet():
    """Groups A, B and C; A holds instances launched 5 hours, 3 days and 1 day ago."""
    records = [
        MembershipRecord(instance_id='i-a-5h', group_name='A'),
        MembershipRecord(instance_id='i-b-10d', group_name='B'),
        MembershipRecord(instance_id='i-a-3d', group_name='A'),
        MembershipRecord(instance_id='i-c-7d', group_name='C'),
        MembershipRecord(instance_id='i-a-1d', group_name='A'),
    ]
    launch_times = {
        'i-a-5h': NOW - timedelta(hours=5),
        'i-a-3d': NOW - timedelta(days=3),
        'i-a-1d': NOW - timedelta(days=1),
        'i-b-10d': NOW - timedelta(days=10),
        'i-c-7d': NOW - timedelta(days=7),
    }
    return records, launch_times
