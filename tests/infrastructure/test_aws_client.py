import pytest
import boto3
from datetime import datetime, timezone
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError, EndpointConnectionError
from moto import mock_aws

from src.config.schemas.aws_schema import AWSConfig
from src.infrastructure.aws.aws_client import AWSClient
from src.infrastructure.aws.exceptions import (
    AuthorizationError,
    NetworkError,
    ResourceNotFoundError,
    ThrottlingError,
    convert_client_error,
)
from src.infrastructure.exceptions import AWSError

REGION = 'us-east-1'


@pytest.fixture
def aws_client():
    """Create AWS client with test configuration."""
    config = AWSConfig(region=REGION, retry_attempts=3, connect_timeout_ms=1000)
    return AWSClient(region_name=REGION, config=config)


def create_group(group_name, size):
    """Create an Auto Scaling group of ``size`` instances and return their ids."""
    ec2 = boto3.client('ec2', region_name=REGION)
    image_id = ec2.describe_images(Owners=['amazon'])['Images'][0]['ImageId']
    ec2.create_launch_template(
        LaunchTemplateName=f'{group_name}-template',
        LaunchTemplateData={'ImageId': image_id, 'InstanceType': 't2.micro'}
    )
    autoscaling = boto3.client('autoscaling', region_name=REGION)
    autoscaling.create_auto_scaling_group(
        AutoScalingGroupName=group_name,
        LaunchTemplate={'LaunchTemplateName': f'{group_name}-template', 'Version': '$Latest'},
        MinSize=size,
        MaxSize=size,
        DesiredCapacity=size,
        AvailabilityZones=[f'{REGION}a'],
    )
    groups = autoscaling.describe_auto_scaling_groups(AutoScalingGroupNames=[group_name])
    return [i['InstanceId'] for i in groups['AutoScalingGroups'][0]['Instances']]


def test_aws_client_config(aws_client):
    assert aws_client.region_name == REGION
    assert aws_client.config.retries['max_attempts'] == 3
    assert aws_client.config.retries['mode'] == 'standard'
    assert aws_client.config.connect_timeout == 1
    assert aws_client.config.read_timeout == 60


def test_aws_client_default_config():
    client = AWSClient(region_name='eu-west-1')

    assert client.aws_config.region == 'eu-west-1'
    assert client.config.retries['max_attempts'] == 0


@mock_aws
def test_clients_are_cached_per_region(aws_client):
    assert aws_client.ec2_client is aws_client.ec2_client
    assert aws_client.autoscaling_client is not None
    assert aws_client._client('ec2', 'eu-west-1') is not aws_client.ec2_client


@mock_aws
def test_list_group_members(aws_client):
    web_ids = create_group('web', 2)
    worker_ids = create_group('worker', 1)

    page = aws_client.list_group_members(REGION)

    assert not page.has_more
    members = {(r.instance_id, r.group_name) for r in page.records}
    assert members == {(i, 'web') for i in web_ids} | {(i, 'worker') for i in worker_ids}


@mock_aws
def test_list_group_members_empty_region(aws_client):
    page = aws_client.list_group_members(REGION)

    assert page.records == []
    assert page.next_token is None


@mock_aws
def test_describe_instances(aws_client):
    instance_ids = create_group('web', 2)

    instances = aws_client.describe_instances(REGION, instance_ids)

    assert sorted(i.instance_id for i in instances) == sorted(instance_ids)
    for instance in instances:
        assert isinstance(instance.launch_time, datetime)
        assert instance.group_name is None


@mock_aws
def test_describe_instances_error(aws_client):
    with pytest.raises(AWSError) as exc:
        aws_client.describe_instances(REGION, ['i-1234567890abcdef0'])
    assert exc.value.operation == 'DescribeInstances'


@pytest.fixture
def mock_boto_client():
    with patch('src.infrastructure.aws.aws_client.boto3.client') as client_factory:
        client = Mock()
        client_factory.return_value = client
        yield client_factory, client


def test_list_group_members_passes_token(aws_client, mock_boto_client):
    client_factory, client = mock_boto_client
    client.describe_auto_scaling_instances.return_value = {
        'AutoScalingInstances': [
            {'InstanceId': 'i-1', 'AutoScalingGroupName': 'web', 'LifecycleState': 'InService'},
        ],
        'NextToken': 'token-2',
    }

    page = aws_client.list_group_members('eu-west-1', 'token-1')

    client.describe_auto_scaling_instances.assert_called_once_with(NextToken='token-1')
    assert client_factory.call_args[0][0] == 'autoscaling'
    assert client_factory.call_args[1]['region_name'] == 'eu-west-1'
    assert page.next_token == 'token-2'
    assert page.records[0].instance_id == 'i-1'


def test_list_group_members_first_page_has_no_token(aws_client, mock_boto_client):
    _, client = mock_boto_client
    client.describe_auto_scaling_instances.return_value = {'AutoScalingInstances': []}

    page = aws_client.list_group_members(REGION)

    client.describe_auto_scaling_instances.assert_called_once_with()
    assert not page.has_more


def test_endpoint_url_is_used(mock_boto_client):
    client_factory, _ = mock_boto_client
    client = AWSClient(REGION, AWSConfig(region=REGION, endpoint_url='http://localhost:4566'))

    client.ec2_client

    assert client_factory.call_args[1]['endpoint_url'] == 'http://localhost:4566'


def test_describe_instances_flattens_reservations(aws_client, mock_boto_client):
    _, client = mock_boto_client
    launch = datetime(2024, 1, 1, tzinfo=timezone.utc)
    paginator = Mock()
    paginator.paginate.return_value = [
        {'Reservations': [
            {'Instances': [{'InstanceId': 'i-1', 'LaunchTime': launch}]},
            {'Instances': [{'InstanceId': 'i-2', 'LaunchTime': launch},
                           {'InstanceId': 'i-3', 'LaunchTime': launch}]},
        ]},
        {'Reservations': [{'Instances': [{'InstanceId': 'i-4', 'LaunchTime': launch}]}]},
    ]
    client.get_paginator.return_value = paginator

    instances = aws_client.describe_instances(REGION, ['i-1', 'i-2', 'i-3', 'i-4'])

    client.get_paginator.assert_called_once_with('describe_instances')
    paginator.paginate.assert_called_once_with(InstanceIds=['i-1', 'i-2', 'i-3', 'i-4'])
    assert [i.instance_id for i in instances] == ['i-1', 'i-2', 'i-3', 'i-4']
    assert instances[0].launch_time == launch


def test_throttling_is_converted(aws_client, mock_boto_client):
    _, client = mock_boto_client
    client.describe_auto_scaling_instances.side_effect = ClientError(
        {'Error': {'Code': 'Throttling', 'Message': 'Rate exceeded'}},
        'DescribeAutoScalingInstances'
    )

    with pytest.raises(ThrottlingError) as exc:
        aws_client.list_group_members(REGION)

    assert exc.value.error_code == 'Throttling'
    assert 'Rate exceeded' in str(exc.value)


@pytest.mark.parametrize("code,error_class", [
    ('UnauthorizedOperation', AuthorizationError),
    ('AuthFailure', AuthorizationError),
    ('RequestLimitExceeded', ThrottlingError),
    ('InvalidInstanceID.NotFound', ResourceNotFoundError),
    ('InternalError', AWSError),
])
def test_convert_client_error(code, error_class):
    error = ClientError({'Error': {'Code': code, 'Message': 'boom'}}, 'DescribeInstances')

    converted = convert_client_error(error, 'DescribeInstances')

    assert type(converted) is error_class
    assert str(converted) == f"AWS DescribeInstances failed: {code} - boom"


def test_convert_connection_error():
    error = EndpointConnectionError(endpoint_url='https://ec2.us-east-1.amazonaws.com')

    converted = convert_client_error(error, 'DescribeInstances')

    assert isinstance(converted, NetworkError)
    assert converted.operation == 'DescribeInstances'
