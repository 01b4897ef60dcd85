"""Image records persisted in a DynamoDB table keyed by object key."""

from decimal import Decimal
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapterProtocol
from core.models.errors import DynamoDBError
from core.models.image import ImageRecord
from core.repositories.metadata_repository import ImageMetadataRepository
from core.utils.constants import (
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
)

Item = dict[str, Any]

logger = Logger(UTC=True)

CREATE_FAILED_MESSAGE = "Unable to save image metadata at this time"
FETCH_FAILED_MESSAGE = "Unable to retrieve image metadata"


def _to_item(record: ImageRecord) -> Item:
    # DynamoDB rejects explicit nulls in optional attributes
    return record.model_dump(exclude_none=True)


def _from_item(item: Item) -> ImageRecord:
    # boto3 hands numbers back as Decimal
    normalized = {
        name: int(value) if isinstance(value, Decimal) else value
        for name, value in item.items()
    }
    return ImageRecord.model_validate(normalized)


def _aws_error_code(exc: ClientError) -> str | None:
    return exc.response.get("Error", {}).get("Code")


class DynamoDBMetadata(ImageMetadataRepository):
    """Image record repository over a :class:`DynamoDBAdapter`.

    Every failure surfaces as :class:`DynamoDBError`; botocore exceptions stay
    chained as ``__cause__`` for the logs.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol) -> None:
        self._db = adapter

    def create_record(self, *, record: ImageRecord) -> None:
        logger.debug(
            "Creating image record",
            extra={"key": record.key, "room_id": record.room_id},
        )

        try:
            # Keys are random, a collision means something upstream is broken
            self._db.put_item(
                item=_to_item(record),
                condition_expression="attribute_not_exists(#key)",
                expression_attribute_names={"#key": "key"},
            )
        except ClientError as exc:
            logger.error(
                "Image record write rejected",
                extra={"key": record.key, "aws_error_code": _aws_error_code(exc)},
            )
            raise self._failure(CREATE_FAILED_MESSAGE, ERROR_CODE_METADATA_CREATE_FAILED, record.key) from exc
        except Exception as exc:
            logger.exception("Image record write failed", extra={"key": record.key})
            raise self._failure(CREATE_FAILED_MESSAGE, ERROR_CODE_METADATA_CREATE_FAILED, record.key) from exc

        logger.info("Image record created", extra={"key": record.key})

    def fetch_record(self, *, key: str) -> ImageRecord | None:
        logger.debug("Fetching image record", extra={"key": key})

        try:
            item = self._db.get_item(key={"key": key}).get("Item")
            return None if item is None else _from_item(item)
        except PydanticValidationError as exc:
            logger.error("Stored image record is malformed", extra={"key": key})
            raise self._failure(
                "Invalid image metadata format", ERROR_CODE_METADATA_FETCH_FAILED, key
            ) from exc
        except ClientError as exc:
            logger.error(
                "Image record read rejected",
                extra={"key": key, "aws_error_code": _aws_error_code(exc)},
            )
            raise self._failure(FETCH_FAILED_MESSAGE, ERROR_CODE_METADATA_FETCH_FAILED, key) from exc
        except Exception as exc:
            logger.exception("Image record read failed", extra={"key": key})
            raise self._failure(FETCH_FAILED_MESSAGE, ERROR_CODE_METADATA_FETCH_FAILED, key) from exc

    @staticmethod
    def _failure(message: str, error_code: str, key: str) -> DynamoDBError:
        return DynamoDBError(message=message, error_code=error_code, details={"key": key})
