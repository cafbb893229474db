import logging
import boto3
from botocore.config import Config
from typing import Dict, Any, Optional, List, Tuple
from botocore.exceptions import BotoCoreError, ClientError

from src.config.schemas.aws_schema import AWSConfig
from src.domain.base.ports import InstanceDescriptionPort, MembershipPort
from src.domain.instance.value_objects import EnrichedInstance, MembershipPage, MembershipRecord
from src.infrastructure.aws.exceptions import convert_client_error

logger = logging.getLogger(__name__)

class AWSClient(MembershipPort, InstanceDescriptionPort):
    """
    Centralized AWS client management.

    Creates the Auto Scaling and EC2 clients (one per region, on first use)
    and implements the membership and instance description ports on top of
    them. Credentials come from the default boto3 chain.
    """

    def __init__(self, region_name: str, config: Optional[AWSConfig] = None):
        """
        Initialize AWS client with configuration.

        Args:
            region_name: Default AWS region name
            config: Optional AWS configuration; defaults are used when omitted
        """
        self.region_name = region_name
        self.aws_config = config or AWSConfig(region=region_name)
        self.config = Config(
            region_name=region_name,
            retries={
                'max_attempts': self.aws_config.retry_attempts,
                'mode': 'standard'
            },
            connect_timeout=self.aws_config.connect_timeout_ms / 1000,
            read_timeout=self.aws_config.read_timeout_ms / 1000
        )
        self._clients: Dict[Tuple[str, str], Any] = {}

    def _client(self, service_name: str, region: Optional[str] = None) -> Any:
        region = region or self.region_name
        key = (service_name, region)
        if key not in self._clients:
            logger.debug(f"Creating {service_name} client for {region}")
            kwargs: Dict[str, Any] = {
                'region_name': region,
                'config': self.config,
            }
            if self.aws_config.endpoint_url:
                kwargs['endpoint_url'] = self.aws_config.endpoint_url
            self._clients[key] = boto3.client(service_name, **kwargs)
        return self._clients[key]

    @property
    def autoscaling_client(self) -> Any:
        return self._client('autoscaling')

    @property
    def ec2_client(self) -> Any:
        return self._client('ec2')

    def list_group_members(self, region: str,
                           continuation_token: Optional[str] = None) -> MembershipPage:
        """Describe one page of Auto Scaling instances."""
        params: Dict[str, Any] = {}
        if continuation_token:
            params['NextToken'] = continuation_token
        try:
            response = self._client('autoscaling', region).describe_auto_scaling_instances(**params)
        except (ClientError, BotoCoreError) as e:
            raise convert_client_error(e, 'DescribeAutoScalingInstances')

        records = [
            MembershipRecord(
                instance_id=item['InstanceId'],
                group_name=item['AutoScalingGroupName']
            )
            for item in response.get('AutoScalingInstances', [])
        ]
        return MembershipPage(records=records, next_token=response.get('NextToken') or None)

    def describe_instances(self, region: str, instance_ids: List[str]) -> List[EnrichedInstance]:
        """Describe EC2 instances, flattening reservations across result pages."""
        instances = []
        try:
            paginator = self._client('ec2', region).get_paginator('describe_instances')
            for page in paginator.paginate(InstanceIds=instance_ids):
                for reservation in page.get('Reservations', []):
                    for instance in reservation.get('Instances', []):
                        instances.append(EnrichedInstance(
                            instance_id=instance['InstanceId'],
                            launch_time=instance['LaunchTime']
                        ))
        except (ClientError, BotoCoreError) as e:
            raise convert_client_error(e, 'DescribeInstances')
        return instances
