#!/usr/bin/env python3
"""
kube-aws Cluster Launcher
=========================
Drives the CloudFormation stack of a Kubernetes cluster on AWS through its
whole lifecycle, checking an existing VPC for subnet conflicts before the
stack is first created.

Usage:
    # Validate the rendered stack and the network layout
    python kube_aws_launcher.py --config cluster.json --stack-template stack.json --mode validate

    # Create the stack and wait for CREATE_COMPLETE
    python kube_aws_launcher.py --config cluster.json --stack-template stack.json --mode create

    # Apply a re-rendered stack to a running cluster
    python kube_aws_launcher.py --config cluster.json --stack-template stack.json --mode update

    # Show the controller IP
    python kube_aws_launcher.py --config cluster.json --mode info

    # Request deletion of the stack
    python kube_aws_launcher.py --config cluster.json --mode destroy
"""

import argparse
import os
import sys

from botocore.exceptions import NoCredentialsError

from kube_aws.cluster import Cluster
from kube_aws.config import load_config
from kube_aws.errors import ClusterError, ConfigError

MODES = ['validate', 'create', 'update', 'info', 'destroy']
TEMPLATE_MODES = {'validate', 'create', 'update'}


def read_stack_template(path: str) -> str:
    try:
        with open(path, 'r') as f:
            return f.read()
    except OSError as e:
        raise ConfigError(f"Could not read stack template {path}: {e}") from e


def run(cluster: Cluster, mode: str, stack_body: str = "", assume_yes: bool = False) -> None:
    """Executes one lifecycle mode against the cluster."""
    if mode == 'validate':
        report = cluster.validate(stack_body)
        print(f"SUCCESS: Validation OK!\n{report}")
    elif mode == 'create':
        cluster.validate(stack_body)
        cluster.create(stack_body)
        print(cluster.info())
    elif mode == 'update':
        cluster.validate(stack_body)
        report = cluster.update(stack_body)
        print(f"SUCCESS: Update complete!\n{report}")
    elif mode == 'info':
        print(cluster.info())
    elif mode == 'destroy':
        if not assume_yes:
            confirm = input(f"\nWARNING: Destroy cluster {cluster.name} and all its resources? Type 'yes': ")
            if confirm.lower() != 'yes':
                print("Destroy cancelled.")
                return
        cluster.destroy()
        print(f"\nSUCCESS: Deletion of {cluster.name} requested. CloudFormation cleanup will complete in a few minutes.")
    else:
        raise ConfigError(f"Unknown mode: {mode}")


def main(argv=None) -> int:
    """Parses arguments and executes the cluster launcher."""
    parser = argparse.ArgumentParser(
        description="Manage the CloudFormation stack of a kube-aws cluster."
    )
    parser.add_argument(
        '--config',
        type=str,
        default='cluster.json',
        help='Path to the cluster configuration JSON file (default: cluster.json).'
    )
    parser.add_argument(
        '--stack-template',
        type=str,
        default='stack-template.json',
        help='Path to the rendered CloudFormation stack (used by validate, create and update).'
    )
    parser.add_argument(
        '--mode',
        type=str,
        required=True,
        choices=MODES,
        help='Operation mode: ' + ', '.join(MODES) + '.'
    )
    parser.add_argument(
        '--region',
        type=str,
        default=None,
        help='AWS region (default: region from config, then AWS_REGION env var).'
    )
    parser.add_argument(
        '--aws-debug',
        action='store_true',
        help='Log AWS API requests and responses.'
    )
    parser.add_argument(
        '--yes',
        action='store_true',
        help='Do not ask for confirmation before destroy.'
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, region=args.region, default_region=os.environ.get('AWS_REGION'))
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Running in AWS Region: {config.region}")

    try:
        stack_body = read_stack_template(args.stack_template) if args.mode in TEMPLATE_MODES else ""
        cluster = Cluster(config, aws_debug=args.aws_debug)
        run(cluster, args.mode, stack_body, assume_yes=args.yes)
    except NoCredentialsError:
        print("\nFATAL ERROR: AWS credentials not found. Ensure you have run 'aws configure'.")
        return 1
    except ClusterError as e:
        print(f"\nERROR: {type(e).__name__}: {e}")
        return 1
    except Exception as e:
        print(f"\nFATAL ERROR: A critical error occurred during execution: {type(e).__name__}")
        print(f"   Error details: {e}")
        return 1

    return 0


def main_entry() -> None:
    sys.exit(main())


if __name__ == '__main__':
    main_entry()
