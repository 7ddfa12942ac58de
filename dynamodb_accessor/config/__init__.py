from .config import DynamoDBConfig, TableDefinition

__all__ = ["DynamoDBConfig", "TableDefinition"]
