"""
Test configuration and fixtures for the DynamoDB table accessor.

Provides configuration, moto-backed tables and accessors bound to them.
"""

import boto3
import pytest
from moto import mock_aws

from dynamodb_accessor import DynamoDBConfig, TableAccessor, TableDefinition


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Keep tests away from real AWS credentials and endpoints."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("DYNAMODB_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("DYNAMODB_TABLE_PREFIX", raising=False)


@pytest.fixture
def mock_dynamodb_config():
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        table_prefix=""
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def users_table(mock_dynamodb_resource):
    """Hash-key-only table."""
    return mock_dynamodb_resource.create_table(
        TableName='users',
        KeySchema=[
            {'AttributeName': 'user_id', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'user_id', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def orders_table(mock_dynamodb_resource):
    """Composite-key table (customer_id + order_id)."""
    return mock_dynamodb_resource.create_table(
        TableName='orders',
        KeySchema=[
            {'AttributeName': 'customer_id', 'KeyType': 'HASH'},
            {'AttributeName': 'order_id', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'customer_id', 'AttributeType': 'S'},
            {'AttributeName': 'order_id', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def users_definition():
    return TableDefinition(name="Users", table_name="users", hash_key="user_id")


@pytest.fixture
def orders_definition():
    return TableDefinition(
        name="Orders",
        table_name="orders",
        hash_key="customer_id",
        range_key="order_id",
    )


@pytest.fixture
def users_accessor(mock_dynamodb_config, users_definition, users_table):
    """Accessor over the mocked users table."""
    return TableAccessor(users_definition, mock_dynamodb_config)


@pytest.fixture
def orders_accessor(mock_dynamodb_config, orders_definition, orders_table):
    """Accessor over the mocked orders table."""
    return TableAccessor(orders_definition, mock_dynamodb_config)
