# kube_aws/network.py

import ipaddress
from typing import Dict, List, Union

from botocore.exceptions import BotoCoreError, ClientError

from .errors import (
    AmbiguousVPC,
    InvalidCIDRError,
    StaleTopologyError,
    SubnetConflictError,
    TransportError,
    VPCNotFound,
)

Network = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def parse_cidr(cidr: str) -> Network:
    """Parses a CIDR string, keeping host bits like ``10.0.1.128/24`` accepted."""
    try:
        return ipaddress.ip_network(cidr, strict=False)
    except ValueError as e:
        raise InvalidCIDRError(cidr, str(e)) from e


def cidr_overlaps(a: Network, b: Network) -> bool:
    """True if either network contains the other's base address."""
    if a.version != b.version:
        return False
    return a.network_address in b or b.network_address in a


def subnet_cidrs(subnet: Dict) -> List[str]:
    """IPv4 and IPv6 blocks of a subnet. IPv6-only subnets carry no CidrBlock."""
    cidrs = []
    if subnet.get('CidrBlock'):
        cidrs.append(subnet['CidrBlock'])
    for association in subnet.get('Ipv6CidrBlockAssociationSet', []):
        if association.get('Ipv6CidrBlock'):
            cidrs.append(association['Ipv6CidrBlock'])
    return cidrs


class NetworkConflictValidator:
    """Checks a candidate instance subnet against the subnets of an existing VPC."""

    def __init__(self, ec2, region: str):
        self.ec2 = ec2
        self.region = region

    def check_no_conflict(self, vpc_id: str, vpc_cidr: str, instance_cidr: str) -> None:
        existing_vpc = self._describe_vpc(vpc_id)

        # Nothing below can be trusted if the declared layout is stale
        if existing_vpc['CidrBlock'] != vpc_cidr:
            raise StaleTopologyError(vpc_id, vpc_cidr, existing_vpc['CidrBlock'])

        instance_net = parse_cidr(instance_cidr)

        for subnet in sorted(self._list_subnets(vpc_id), key=lambda s: s['SubnetId']):
            for subnet_cidr in subnet_cidrs(subnet):
                subnet_net = parse_cidr(subnet_cidr)
                if cidr_overlaps(instance_net, subnet_net):
                    raise SubnetConflictError(subnet['SubnetId'], str(instance_net), str(subnet_net))

    def _describe_vpc(self, vpc_id: str) -> Dict:
        try:
            response = self.ec2.describe_vpcs(VpcIds=[vpc_id])
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'InvalidVpcID.NotFound':
                raise VPCNotFound(vpc_id, self.region) from e
            raise TransportError(f"error describing existing vpc: {e}") from e
        except BotoCoreError as e:
            raise TransportError(f"error describing existing vpc: {e}") from e

        vpcs = response.get('Vpcs', [])
        if not vpcs:
            raise VPCNotFound(vpc_id, self.region)
        if len(vpcs) > 1:
            raise AmbiguousVPC(vpc_id, len(vpcs))
        return vpcs[0]

    def _list_subnets(self, vpc_id: str) -> List[Dict]:
        subnets = []
        paginator = self.ec2.get_paginator('describe_subnets')
        try:
            for page in paginator.paginate(Filters=[{'Name': 'vpc-id', 'Values': [vpc_id]}]):
                subnets.extend(page.get('Subnets', []))
        except (ClientError, BotoCoreError) as e:
            raise TransportError(f"error describing subnets for vpc: {e}") from e
        return subnets
