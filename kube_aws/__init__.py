"""
Lifecycle of a kube-aws cluster's CloudFormation stack: validate, create,
update, inspect and destroy, with a subnet conflict check against an
existing VPC before first creation.
"""

from .cluster import Cluster
from .config import load_config
from .dataclasses import ClusterConfig, ClusterInfo

__all__ = ["Cluster", "ClusterConfig", "ClusterInfo", "load_config"]
