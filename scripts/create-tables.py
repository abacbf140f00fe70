#!/usr/bin/env python3
"""
DynamoDB table provisioning script

Creates the NFTEvents and Parameters tables when they don't exist.
Useful against DynamoDB Local before running the monitor locally.

Usage:
    python scripts/create-tables.py [--endpoint http://localhost:8000] [--region us-east-1]
"""

import argparse
import asyncio
import sys

from botocore.exceptions import BotoCoreError, ClientError

from nft_monitor.infrastructure.config import Settings
from nft_monitor.infrastructure.persistence import ApplicationError, nft_event_dao, parameter_dao


async def create_tables(settings: Settings) -> dict[str, bool]:
    """Connect every DAO, creating missing tables."""
    results = {}
    for dao in (nft_event_dao(settings), parameter_dao(settings)):
        results[dao.table_name] = await dao.connect()
    return results


def main():
    parser = argparse.ArgumentParser(description="Create NFT monitor DynamoDB tables")
    parser.add_argument(
        "--endpoint",
        default=None,
        help="DynamoDB endpoint override (e.g. http://localhost:8000)",
    )
    parser.add_argument(
        "--region",
        default=None,
        help="AWS region (default: from NFT_MONITOR_AWS_REGION)",
    )
    args = parser.parse_args()

    overrides = {}
    if args.endpoint:
        overrides["dynamodb_endpoint"] = args.endpoint
    if args.region:
        overrides["aws_region"] = args.region
    settings = Settings(**overrides)

    try:
        results = asyncio.run(create_tables(settings))
    except (ApplicationError, ClientError, BotoCoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for table_name, created in results.items():
        print(f"{table_name}: {'created' if created else 'already exists'}")


if __name__ == "__main__":
    main()
