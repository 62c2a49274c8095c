# kube_aws/validation.py

import json
from typing import Dict

from botocore.exceptions import BotoCoreError, ClientError

from .dataclasses import ClusterConfig
from .errors import InvalidTemplateError, InvariantViolation, TransportError
from .network import NetworkConflictValidator
from .stack_status import is_stack_missing_error


def render_response(response: Dict) -> str:
    """Formats an API response for display, without the request metadata."""
    body = {k: v for k, v in response.items() if k != 'ResponseMetadata'}
    return json.dumps(body, indent=2, sort_keys=True, default=str)


class StackValidator:
    """Validates a stack document and, before first creation, the target VPC."""

    def __init__(self, config: ClusterConfig, cloudformation, ec2):
        self.config = config
        self.cloudformation = cloudformation
        self.network = NetworkConflictValidator(ec2, config.region)

    def validate(self, stack_body: str) -> str:
        try:
            report = self.cloudformation.validate_template(TemplateBody=stack_body)
        except ClientError as e:
            raise InvalidTemplateError(f"invalid cloudformation stack: {e}") from e
        except BotoCoreError as e:
            raise TransportError(f"error validating cloudformation stack: {e}") from e

        stack_exists = self.stack_exists()

        # Once the stack exists its own subnet is already taken, so the
        # conflict check only applies before first creation
        if self.config.uses_existing_vpc and not stack_exists:
            print("INFO: Existing VPC detected. Will validate for subnet cidr conflicts")
            self.network.check_no_conflict(
                self.config.vpc_id, self.config.vpc_cidr, self.config.instance_cidr
            )

        return render_response(report)

    def stack_exists(self) -> bool:
        name = self.config.cluster_name
        try:
            response = self.cloudformation.describe_stacks(StackName=name)
        except ClientError as e:
            if is_stack_missing_error(e, name):
                return False
            raise TransportError(f"error describing stack: {e}") from e
        except BotoCoreError as e:
            raise TransportError(f"error describing stack: {e}") from e

        stacks = response.get('Stacks', [])
        if len(stacks) > 1:
            raise InvariantViolation(f"found more than one stack with name {name}")
        return len(stacks) == 1
