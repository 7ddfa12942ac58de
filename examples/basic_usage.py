#!/usr/bin/env python3
"""
Basic usage of the DynamoDB table accessor.

1. Setting up configuration and a table definition
2. Writing, reading and deleting items with Result handling
3. Batch reads and paginated queries
4. Attaching an observer
"""

import asyncio
import logging

from boto3.dynamodb.conditions import Key

from dynamodb_accessor import (
    DynamoDBConfig,
    Operation,
    TableAccessor,
    TableDefinition,
)

logging.basicConfig(level=logging.INFO)


async def audit_observer(operation: Operation, data, params):
    """Print every successful operation."""
    print(f"   [observer] {operation.value}: {params}")


async def main():
    """Demonstrate basic usage of the table accessor."""

    # 1. Configure DynamoDB connection
    print("1. Setting up DynamoDB configuration...")
    config = DynamoDBConfig.from_env()  # Uses environment variables

    # For local development, you might use:
    # config = DynamoDBConfig.for_local_development()

    orders = TableAccessor(
        TableDefinition(
            name="Orders",
            table_name="orders",
            hash_key="customer_id",
            range_key="order_id",
        ),
        config,
        observers=[audit_observer],
    )

    # 2. Write and read
    print("2. Writing an order...")
    error, order = await orders.put({
        'customer_id': 'c-100',
        'order_id': 'o-1',
        'status': 'NEW',
    })
    if error:
        print(f"   put failed: {error}")
        return
    print(f"   stored: {order}")

    error, previous = await orders.put(
        {'customer_id': 'c-100', 'order_id': 'o-1', 'status': 'PAID'},
        return_old=True,
    )
    print(f"   overwrote: {previous}")

    error, order = await orders.get({'customer_id': 'c-100', 'order_id': 'o-1'})
    print(f"   read back: {order}")

    # 3. Batch reads and queries
    print("3. Batch get and query...")
    error, found = await orders.batch_get([
        {'customer_id': 'c-100', 'order_id': 'o-1'},
        {'customer_id': 'c-100', 'order_id': 'missing'},
    ])
    print(f"   batch found {len(found or [])} item(s)")

    result = await orders.query({
        'KeyConditionExpression': Key('customer_id').eq('c-100'),
        'Limit': 25,
    })
    if result.is_success:
        print(f"   customer has {len(result.value)} order(s)")

    # 4. Delete
    print("4. Deleting the order...")
    error, deleted = await orders.delete({'customer_id': 'c-100', 'order_id': 'o-1'})
    print(f"   deleted: {deleted}")


if __name__ == "__main__":
    asyncio.run(main())
