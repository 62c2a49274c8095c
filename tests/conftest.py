"""In-memory stand-ins for the boto3 clients the cluster core talks to."""

from typing import Dict, List

import pytest
from botocore.exceptions import ClientError

from kube_aws.dataclasses import ClusterConfig


def client_error(code: str, message: str, operation: str = 'DescribeStacks') -> ClientError:
    return ClientError({'Error': {'Code': code, 'Message': message}}, operation)


def stack_missing_error(name: str) -> ClientError:
    return client_error('ValidationError', f"Stack with id {name} does not exist")


class FakePaginator:
    def __init__(self, pages: List[Dict], calls: List):
        self.pages = pages
        self.calls = calls

    def paginate(self, **kwargs):
        self.calls.append(('paginate', kwargs))
        for page in self.pages:
            yield page


class FakeEC2:
    def __init__(self, vpcs=None, subnet_pages=None, vpc_error=None):
        self.vpcs = vpcs or []
        self.subnet_pages = subnet_pages if subnet_pages is not None else [{'Subnets': []}]
        self.vpc_error = vpc_error
        self.calls = []

    def describe_vpcs(self, **kwargs):
        self.calls.append(('describe_vpcs', kwargs))
        if self.vpc_error:
            raise self.vpc_error
        return {'Vpcs': list(self.vpcs)}

    def get_paginator(self, operation):
        self.calls.append(('get_paginator', operation))
        return FakePaginator(self.subnet_pages, self.calls)

    @property
    def subnets_fetched(self) -> bool:
        return any(call[0] == 'paginate' for call in self.calls)


class FakeCloudFormation:
    """Replays scripted describe_stacks results; exceptions in the script are raised."""

    def __init__(self, describe_results=None, resource_pages=None):
        self.describe_results = list(describe_results or [])
        self.resource_pages = list(resource_pages or [])
        self.validate_result = {'Parameters': [], 'Description': 'kube-aws cluster'}
        self.validate_error = None
        self.create_error = None
        self.update_error = None
        self.delete_error = None
        self.calls = []

    def validate_template(self, **kwargs):
        self.calls.append(('validate_template', kwargs))
        if self.validate_error:
            raise self.validate_error
        return dict(self.validate_result, ResponseMetadata={'RequestId': 'req-1'})

    def describe_stacks(self, **kwargs):
        self.calls.append(('describe_stacks', kwargs))
        result = self.describe_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def create_stack(self, **kwargs):
        self.calls.append(('create_stack', kwargs))
        if self.create_error:
            raise self.create_error
        return {'StackId': f"arn:aws:cloudformation:us-west-2:123456789012:stack/{kwargs['StackName']}/1"}

    def update_stack(self, **kwargs):
        self.calls.append(('update_stack', kwargs))
        if self.update_error:
            raise self.update_error
        return {'StackId': f"arn:aws:cloudformation:us-west-2:123456789012:stack/{kwargs['StackName']}/1"}

    def delete_stack(self, **kwargs):
        self.calls.append(('delete_stack', kwargs))
        if self.delete_error:
            raise self.delete_error
        return {}

    def list_stack_resources(self, **kwargs):
        self.calls.append(('list_stack_resources', kwargs))
        return self.resource_pages.pop(0)

    def called(self, operation: str) -> List[Dict]:
        return [kwargs for name, kwargs in self.calls if name == operation]


def stack_response(status: str, reason: str = '') -> Dict:
    stack = {'StackName': 'mycluster', 'StackStatus': status}
    if reason:
        stack['StackStatusReason'] = reason
    return {'Stacks': [stack]}


class SleepRecorder:
    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def new_vpc_config():
    return ClusterConfig(region='us-west-2', cluster_name='mycluster', instance_cidr='10.0.0.0/24')


@pytest.fixture
def existing_vpc_config():
    return ClusterConfig(
        region='us-west-2',
        cluster_name='mycluster',
        vpc_id='vpc-0abc',
        vpc_cidr='10.0.0.0/16',
        instance_cidr='10.0.3.0/24',
    )
