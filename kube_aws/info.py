# kube_aws/info.py

from typing import Dict, List

from botocore.exceptions import BotoCoreError, ClientError

from .dataclasses import ClusterInfo
from .errors import IncompleteStackError, TransportError

CONTROLLER_EIP_LOGICAL_ID = 'EIPController'


class StackInfoReader:
    """Reads externally visible outputs from the resources of a deployed stack."""

    def __init__(self, stack_name: str, cloudformation):
        self.stack_name = stack_name
        self.cloudformation = cloudformation

    def info(self) -> ClusterInfo:
        info = ClusterInfo(name=self.stack_name)
        for resource in self.list_resources():
            if resource.get('LogicalResourceId') != CONTROLLER_EIP_LOGICAL_ID:
                continue
            if not resource.get('PhysicalResourceId'):
                raise IncompleteStackError(
                    CONTROLLER_EIP_LOGICAL_ID,
                    "unable to get public IP of controller instance",
                )
            info.controller_ip = resource['PhysicalResourceId']
        return info

    def list_resources(self) -> List[Dict]:
        """All resource summaries of the stack, following NextToken to the end."""
        resources = []
        request = {'StackName': self.stack_name}
        while True:
            try:
                response = self.cloudformation.list_stack_resources(**request)
            except (ClientError, BotoCoreError) as e:
                raise TransportError(f"error listing stack resources: {e}") from e

            resources.extend(response.get('StackResourceSummaries', []))
            next_token = response.get('NextToken')
            if not next_token:
                break
            request['NextToken'] = next_token
        return resources
