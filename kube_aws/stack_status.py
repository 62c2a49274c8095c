# kube_aws/stack_status.py
"""
Interpretation of CloudFormation stack status strings.

Each classifier looks at a single describe_stacks response and decides
whether the operation is still running, has finished, or has failed. They
hold no state and make no API calls, so the poll loop in lifecycle.py stays
a thin shell around them.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from botocore.exceptions import ClientError

from .errors import UnexpectedState


class StackStatus(Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    NOT_FOUND = "not_found"

    @property
    def is_terminal(self) -> bool:
        return self is not StackStatus.PENDING


@dataclass(frozen=True)
class StackState:
    status: StackStatus
    raw_status: str = ""
    reason: str = ""


CREATE_STATUSES = {
    'CREATE_IN_PROGRESS': StackStatus.PENDING,
    'CREATE_COMPLETE': StackStatus.SUCCEEDED,
    'CREATE_FAILED': StackStatus.FAILED,
}

UPDATE_STATUSES = {
    'UPDATE_IN_PROGRESS': StackStatus.PENDING,
    'UPDATE_COMPLETE_CLEANUP_IN_PROGRESS': StackStatus.PENDING,
    'UPDATE_COMPLETE': StackStatus.SUCCEEDED,
    'UPDATE_FAILED': StackStatus.FAILED,
    'UPDATE_ROLLBACK_IN_PROGRESS': StackStatus.PENDING,
    'UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS': StackStatus.PENDING,
    'UPDATE_ROLLBACK_COMPLETE': StackStatus.FAILED,
    'UPDATE_ROLLBACK_FAILED': StackStatus.FAILED,
}


def _classify(response: Dict, table: Dict[str, StackStatus]) -> StackState:
    stacks = response.get('Stacks', [])
    if not stacks:
        return StackState(StackStatus.NOT_FOUND)

    stack = stacks[0]
    raw_status = stack.get('StackStatus', '')
    status = table.get(raw_status)
    if status is None:
        # Unknown statuses are never treated as progress
        raise UnexpectedState(raw_status)
    return StackState(status, raw_status, stack.get('StackStatusReason', ''))


def classify_create_status(response: Dict) -> StackState:
    return _classify(response, CREATE_STATUSES)


def classify_update_status(response: Dict) -> StackState:
    return _classify(response, UPDATE_STATUSES)


def is_stack_missing_error(error: ClientError, stack_name: str) -> bool:
    """Recognizes the describe_stacks error CloudFormation returns for an absent stack.

    CloudFormation has no dedicated error code for this, only a
    ``ValidationError`` with a free-text message, so this match is fragile and
    is the one place in the package that depends on the wording.
    """
    error_info = error.response.get('Error', {})
    if error_info.get('Code') != 'ValidationError':
        return False
    pattern = re.compile(rf"^Stack with id {re.escape(stack_name)} does not exist")
    return pattern.match(error_info.get('Message', '')) is not None

