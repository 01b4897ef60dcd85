"""boto3 access to the image record table."""

from typing import Any, Protocol, cast

import boto3

from core.config import StorageSettings
from core.models.errors import ConfigurationError
from core.utils.constants import ENV_IMAGE_METADATA_TABLE_NAME


class DynamoDBTable(Protocol):
    """The slice of a boto3 ``Table`` resource the adapter calls."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """What DynamoDBMetadata needs from an adapter."""

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
        expression_attribute_names: dict[str, str] | None = None,
    ) -> dict[str, Any]: ...
    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Binds a boto3 ``Table`` and forwards calls with DynamoDB's own parameter names.

    botocore exceptions propagate unchanged; :class:`DynamoDBMetadata` maps them.
    """

    def __init__(self, settings: StorageSettings) -> None:
        """Bind to the image record table named in settings."""
        if not settings.metadata_table_name:
            raise ConfigurationError(
                message=f"{ENV_IMAGE_METADATA_TABLE_NAME} environment variable is not set",
                details={"setting": ENV_IMAGE_METADATA_TABLE_NAME},
            )

        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=settings.aws_endpoint_url,
            region_name=settings.aws_region,
        )

        self.table: DynamoDBTable = cast(
            DynamoDBTable,
            dynamodb.Table(settings.metadata_table_name),
        )

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
        expression_attribute_names: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """``PutItem``, optionally guarded by a condition expression."""
        kwargs: dict[str, Any] = {"Item": item}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression

        if expression_attribute_names:
            kwargs["ExpressionAttributeNames"] = expression_attribute_names

        return self.table.put_item(**kwargs)

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        return self.table.get_item(Key=key)
