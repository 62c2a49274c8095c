# kube_aws/errors.py

from typing import Optional


class ClusterError(Exception):
    """Base class for every error raised by the cluster core."""


class ConfigError(ClusterError):
    """Cluster configuration is missing keys or holds invalid values."""


class TransportError(ClusterError):
    """An AWS API call failed. Never retried here."""


class InvalidTemplateError(ClusterError):
    """CloudFormation rejected the rendered stack document."""


class InvalidCIDRError(ClusterError):
    def __init__(self, cidr: str, detail: str):
        self.cidr = cidr
        super().__init__(f"error parsing cidr {cidr} : {detail}")


class VPCNotFound(ClusterError):
    def __init__(self, vpc_id: str, region: str):
        self.vpc_id = vpc_id
        self.region = region
        super().__init__(f"could not find vpc {vpc_id} in region {region}")


class AmbiguousVPC(ClusterError):
    def __init__(self, vpc_id: str, count: int):
        self.vpc_id = vpc_id
        self.count = count
        super().__init__(f"found {count} vpcs with id {vpc_id}. this is NOT NORMAL.")


class InvariantViolation(ClusterError):
    """The control plane returned something its contract rules out."""


class StaleTopologyError(ClusterError):
    """Configured VPC CIDR does not match the live VPC, so nothing else can be trusted."""

    def __init__(self, vpc_id: str, configured_cidr: str, actual_cidr: str):
        self.vpc_id = vpc_id
        self.configured_cidr = configured_cidr
        self.actual_cidr = actual_cidr
        super().__init__(
            f"configured vpcCidr ({configured_cidr}) does not match actual "
            f"existing vpc cidr ({actual_cidr}) for {vpc_id}"
        )


class SubnetConflictError(ClusterError):
    def __init__(self, subnet_id: str, instance_cidr: str, subnet_cidr: str):
        self.subnet_id = subnet_id
        self.instance_cidr = instance_cidr
        self.subnet_cidr = subnet_cidr
        super().__init__(
            f"instance cidr ({instance_cidr}) conflicts with existing subnet "
            f"{subnet_id}, cidr={subnet_cidr}"
        )


class ProvisioningFailed(ClusterError):
    """Create or update reached a terminal failure status."""

    def __init__(self, status: str, reason: Optional[str]):
        self.status = status
        self.reason = reason or ""
        super().__init__(f"Stack status: {status} : {self.reason}")


class UnexpectedState(ClusterError):
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"unexpected stack status: {status}")


class StackNotFoundError(ClusterError):
    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(f"stack not found: {stack_name}")


class IncompleteStackError(ClusterError):
    """A resource is listed in the stack but has no physical id yet."""

    def __init__(self, logical_id: str, detail: str):
        self.logical_id = logical_id
        super().__init__(f"{detail} ({logical_id} has no physical resource id)")


class OperationCancelled(ClusterError):
    def __init__(self, stack_name: str, last_status: str):
        self.stack_name = stack_name
        self.last_status = last_status
        super().__init__(f"polling of stack {stack_name} cancelled while {last_status}")
