# kube_aws/lifecycle.py

import time
from typing import Callable, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .errors import (
    OperationCancelled,
    ProvisioningFailed,
    StackNotFoundError,
    TransportError,
)
from .stack_status import (
    StackState,
    StackStatus,
    classify_create_status,
    classify_update_status,
)
from .validation import render_response

POLL_INTERVAL_SECONDS = 3


def poll_until_terminal(
    stack_id: str,
    describe: Callable[[], Dict],
    classify: Callable[[Dict], StackState],
    sleep: Callable[[float], None] = time.sleep,
    interval: float = POLL_INTERVAL_SECONDS,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> StackState:
    """Describes the stack until it reaches a terminal status.

    Returns the successful state; raises ProvisioningFailed on a failure
    status and StackNotFoundError if the stack disappears. API errors are
    not retried.
    """
    while True:
        state = classify(describe())

        if state.status.is_terminal:
            if state.status is StackStatus.FAILED:
                raise ProvisioningFailed(state.raw_status, state.reason)
            if state.status is StackStatus.NOT_FOUND:
                raise StackNotFoundError(stack_id)
            return state

        sleep(interval)
        if should_cancel is not None and should_cancel():
            raise OperationCancelled(stack_id, state.raw_status)


class StackLifecycle:
    """Create, update and delete of the cluster's CloudFormation stack."""

    def __init__(
        self,
        stack_name: str,
        cloudformation,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        should_cancel: Optional[Callable[[], bool]] = None,
    ):
        self.stack_name = stack_name
        self.cloudformation = cloudformation
        self.sleep = sleep
        self.poll_interval = poll_interval
        self.should_cancel = should_cancel

    def create(self, stack_body: str) -> None:
        try:
            response = self.cloudformation.create_stack(
                StackName=self.stack_name,
                OnFailure='DO_NOTHING',
                Capabilities=['CAPABILITY_IAM'],
                TemplateBody=stack_body,
            )
        except (ClientError, BotoCoreError) as e:
            raise TransportError(f"error creating cloudformation stack: {e}") from e

        stack_id = response['StackId']
        print(f"WAITING: Stack {self.stack_name} is being created ({stack_id})...")
        self._wait(stack_id, classify_create_status)
        print(f"SUCCESS: Stack {self.stack_name} created.")

    def update(self, stack_body: str) -> str:
        try:
            response = self.cloudformation.update_stack(
                Capabilities=['CAPABILITY_IAM'],
                StackName=self.stack_name,
                TemplateBody=stack_body,
            )
        except (ClientError, BotoCoreError) as e:
            raise TransportError(f"error updating cloudformation stack: {e}") from e

        stack_id = response['StackId']
        print(f"WAITING: Stack {self.stack_name} is being updated ({stack_id})...")
        self._wait(stack_id, classify_update_status)
        print(f"SUCCESS: Stack {self.stack_name} updated.")
        return render_response(response)

    def destroy(self) -> None:
        """Requests deletion and returns without waiting for it to finish."""
        try:
            self.cloudformation.delete_stack(StackName=self.stack_name)
        except (ClientError, BotoCoreError) as e:
            raise TransportError(f"error deleting cloudformation stack: {e}") from e

    def _wait(self, stack_id: str, classify: Callable[[Dict], StackState]) -> StackState:
        return poll_until_terminal(
            stack_id,
            lambda: self._describe(stack_id),
            classify,
            sleep=self.sleep,
            interval=self.poll_interval,
            should_cancel=self.should_cancel,
        )

    def _describe(self, stack_id: str) -> Dict:
        try:
            return self.cloudformation.describe_stacks(StackName=stack_id)
        except (ClientError, BotoCoreError) as e:
            raise TransportError(f"error describing stack {stack_id}: {e}") from e
