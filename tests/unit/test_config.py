import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from dynamodb_accessor.config import DynamoDBConfig, TableDefinition


class TestDynamoDBConfig:
    """Test cases for DynamoDBConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}):
            config = DynamoDBConfig()

            assert config.region_name == "us-west-2"
            assert config.max_pool_connections == 50
            assert config.retries == 3
            assert config.timeout_seconds == 30.0
            assert config.table_prefix == ""

    def test_config_from_env_vars(self):
        """Test configuration from environment variables."""
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "DYNAMODB_TABLE_PREFIX": "test",
            "DYNAMODB_DEBUG_LOGGING": "true"
        }

        with patch.dict(os.environ, env_vars):
            config = DynamoDBConfig.from_env()

            assert config.aws_access_key_id == "test_key"
            assert config.aws_secret_access_key == "test_secret"
            assert config.region_name == "eu-west-1"
            assert config.endpoint_url == "http://localhost:8000"
            assert config.table_prefix == "test"
            assert config.enable_debug_logging is True

    def test_table_name_generation(self):
        """Test table name generation with prefix."""
        config = DynamoDBConfig(table_prefix="myapp")

        assert config.get_table_name("users") == "myapp_users"

    def test_table_name_generation_no_prefix(self):
        """Test table name generation without prefix."""
        config = DynamoDBConfig(table_prefix="")

        assert config.get_table_name("users") == "users"

    def test_local_development_config(self):
        """Test local development configuration."""
        config = DynamoDBConfig.for_local_development()

        assert config.aws_access_key_id == "local"
        assert config.aws_secret_access_key == "local"
        assert config.endpoint_url == "http://localhost:8000"
        assert config.enable_debug_logging is True

    def test_for_region_returns_copy(self):
        """Region override leaves the original untouched."""
        config = DynamoDBConfig(region_name="us-east-1", table_prefix="app")

        moved = config.for_region("ap-south-1")

        assert moved.region_name == "ap-south-1"
        assert moved.table_prefix == "app"
        assert config.region_name == "us-east-1"

    def test_region_validation(self):
        """Test region validation."""
        with pytest.raises(ValueError, match="AWS region name is required"):
            DynamoDBConfig(region_name="")


class TestTableDefinition:
    """Test cases for TableDefinition."""

    def test_hash_only_definition(self):
        definition = TableDefinition(table_name="users", hash_key="user_id")

        assert definition.range_key is None
        assert definition.region is None
        assert definition.display_name == "users"

    def test_display_name_prefers_name(self):
        definition = TableDefinition(name="Users", table_name="users", hash_key="user_id")

        assert definition.display_name == "Users"

    def test_missing_required_fields_fail_fast(self):
        with pytest.raises(PydanticValidationError):
            TableDefinition(table_name="users")

        with pytest.raises(PydanticValidationError):
            TableDefinition(hash_key="user_id")

    def test_definition_is_immutable(self):
        definition = TableDefinition(table_name="users", hash_key="user_id")

        with pytest.raises(PydanticValidationError):
            definition.hash_key = "other"
