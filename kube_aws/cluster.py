# kube_aws/cluster.py

import logging
import time
from typing import Callable, Optional

import boto3

from .dataclasses import ClusterConfig, ClusterInfo
from .info import StackInfoReader
from .lifecycle import POLL_INTERVAL_SECONDS, StackLifecycle
from .validation import StackValidator


class Cluster:
    """Handle on one named cluster stack. Every call goes back to AWS."""

    def __init__(
        self,
        config: ClusterConfig,
        cloudformation=None,
        ec2=None,
        aws_debug: bool = False,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        should_cancel: Optional[Callable[[], bool]] = None,
    ):
        self.config = config

        if aws_debug:
            boto3.set_stream_logger('botocore', logging.DEBUG)

        self.cloudformation = cloudformation or boto3.client('cloudformation', region_name=config.region)
        self.ec2 = ec2 or boto3.client('ec2', region_name=config.region)

        self._validator = StackValidator(config, self.cloudformation, self.ec2)
        self._lifecycle = StackLifecycle(
            config.cluster_name,
            self.cloudformation,
            sleep=sleep,
            poll_interval=poll_interval,
            should_cancel=should_cancel,
        )
        self._reader = StackInfoReader(config.cluster_name, self.cloudformation)

    @property
    def name(self) -> str:
        return self.config.cluster_name

    def validate(self, stack_body: str) -> str:
        """Returns the CloudFormation validation report."""
        return self._validator.validate(stack_body)

    def create(self, stack_body: str) -> None:
        self._lifecycle.create(stack_body)

    def update(self, stack_body: str) -> str:
        """Returns the update response once the stack reaches UPDATE_COMPLETE."""
        return self._lifecycle.update(stack_body)

    def info(self) -> ClusterInfo:
        return self._reader.info()

    def destroy(self) -> None:
        self._lifecycle.destroy()
