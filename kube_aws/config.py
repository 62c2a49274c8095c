# kube_aws/config.py

import json
from typing import Dict, Optional

from .dataclasses import DEFAULT_INSTANCE_CIDR, DEFAULT_VPC_CIDR, ClusterConfig
from .errors import ClusterError, ConfigError
from .network import parse_cidr

# camelCase keys as written in cluster.json, snake_case accepted too
KEY_ALIASES = {
    'clusterName': 'cluster_name',
    'vpcId': 'vpc_id',
    'vpcCIDR': 'vpc_cidr',
    'instanceCIDR': 'instance_cidr',
}


def load_config(
    config_path: str,
    region: Optional[str] = None,
    default_region: Optional[str] = None,
) -> ClusterConfig:
    """Load the cluster configuration JSON file.

    ``region`` overrides the file; ``default_region`` only fills it in when
    the file has none.
    """
    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found at {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON format in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {config_path} must be a JSON object")
    if region:
        data['region'] = region
    elif not data.get('region') and default_region:
        data['region'] = default_region
    return cluster_config_from_dict(data)


def cluster_config_from_dict(data: Dict) -> ClusterConfig:
    values = {KEY_ALIASES.get(k, k): v for k, v in data.items()}

    for key in ('region', 'cluster_name'):
        if not values.get(key):
            raise ConfigError(f"Missing required key '{key}' in cluster config")

    vpc_id = values.get('vpc_id') or None
    if vpc_id and not values.get('vpc_cidr'):
        raise ConfigError("vpcCIDR must be set when vpcId is set")

    config = ClusterConfig(
        region=values['region'],
        cluster_name=values['cluster_name'],
        vpc_id=vpc_id,
        vpc_cidr=values.get('vpc_cidr') or DEFAULT_VPC_CIDR,
        instance_cidr=values.get('instance_cidr') or DEFAULT_INSTANCE_CIDR,
    )
    _validate_network(config)
    return config


def _validate_network(config: ClusterConfig) -> None:
    try:
        vpc_net = parse_cidr(config.vpc_cidr)
        instance_net = parse_cidr(config.instance_cidr)
    except ClusterError as e:
        raise ConfigError(f"invalid network config: {e}") from e

    if instance_net.version != vpc_net.version or not instance_net.subnet_of(vpc_net):
        raise ConfigError(
            f"vpcCIDR ({config.vpc_cidr}) does not contain instanceCIDR ({config.instance_cidr})"
        )
