import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


class DynamoDBConfig(BaseModel):
    """Configuration for DynamoDB connection and operations."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # DynamoDB specific settings
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    # Table configuration
    table_prefix: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_PREFIX", ""),
        description="Prefix to add to all table names"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts boto3 makes before a failure is reported"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for DynamoDB operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    def get_table_name(self, base_name: str) -> str:
        """Get the full table name with the configured prefix.

        Args:
            base_name: Base table name

        Returns:
            ``<prefix>_<base_name>``, or ``base_name`` when no prefix is set
        """
        if self.table_prefix:
            return f"{self.table_prefix}_{base_name}"
        return base_name

    def for_region(self, region_name: str) -> 'DynamoDBConfig':
        """Return a copy of this configuration pointed at another region."""
        return self.model_copy(update={'region_name': region_name})

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        """Create configuration from environment variables.

        Returns:
            DynamoDBConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'DynamoDBConfig':
        """Create configuration for local DynamoDB development.

        Returns:
            DynamoDBConfig instance configured for DynamoDB Local
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url="http://localhost:8000",
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True,
    )


class TableDefinition(BaseModel):
    """Static description of one DynamoDB table.

    Built once per table and never changed. Only the structural presence of
    ``table_name`` and ``hash_key`` is checked; key names are otherwise taken
    as given.
    """

    name: str = Field(
        default="",
        description="Display name used in log messages"
    )

    table_name: str = Field(
        description="DynamoDB table name (before any configured prefix)"
    )

    hash_key: str = Field(
        description="Partition key attribute name"
    )

    range_key: Optional[str] = Field(
        default=None,
        description="Sort key attribute name, if the table has one"
    )

    region: Optional[str] = Field(
        default=None,
        description="Region override for this table"
    )

    @property
    def display_name(self) -> str:
        return self.name or self.table_name

    model_config = ConfigDict(frozen=True)
