# kube_aws/dataclasses.py

from dataclasses import dataclass
from typing import Optional

DEFAULT_VPC_CIDR = "10.0.0.0/16"
DEFAULT_INSTANCE_CIDR = "10.0.0.0/24"


@dataclass(frozen=True)
class ClusterConfig:
    """Network topology and identity of one cluster. Immutable for an operation."""
    region: str
    cluster_name: str
    instance_cidr: str
    vpc_cidr: str = DEFAULT_VPC_CIDR
    vpc_id: Optional[str] = None

    @property
    def uses_existing_vpc(self) -> bool:
        return bool(self.vpc_id)


@dataclass
class ClusterInfo:
    """Snapshot of the externally visible outputs of a deployed stack."""
    name: str
    controller_ip: str = ""

    def __str__(self) -> str:
        rows = [
            ("Cluster Name:", self.name),
            ("Controller IP:", self.controller_ip),
        ]
        width = max(len(label) for label, _ in rows) + 2
        return "".join(f"{label:<{width}}{value}\n" for label, value in rows)
