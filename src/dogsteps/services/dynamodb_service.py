"""
DynamoDB service for the DogSteps application.

This service persists completed walk sessions. The stored set always mirrors
the pruned session list handed over by the activity service: saving writes
every session and removes items that are no longer in the list. Daily
activity records are never stored; they are recomputed from sessions.

Classes:
    DynamoDBService: Service for walk session persistence in DynamoDB
"""

import os
from typing import Any, Dict, List, Optional, Sequence

import boto3
from botocore.exceptions import ClientError, NoCredentialsError
from pydantic import ValidationError

from ..models.walk_session import WalkSession
from ..utils import log_error, log_event

TABLE_NAME_ENV = "WALK_SESSIONS_TABLE"


class DynamoDBService:
    """
    Service for managing walk sessions in DynamoDB.

    The table is keyed by the session `id` (string hash key).

    Attributes:
        table_name: Name of the DynamoDB table
        dynamodb: Boto3 DynamoDB resource
        table: DynamoDB table resource

    Example:
        >>> store = DynamoDBService()
        >>> store.save_sessions(sessions)
        True
        >>> len(store.load_sessions())
        3
    """

    def __init__(self, table_name: Optional[str] = None):
        """
        Initialize the DynamoDB service.

        Args:
            table_name: Optional table name override, uses env var if not provided

        Raises:
            ValueError: If table name is not provided and not in environment
            NoCredentialsError: If AWS credentials are not configured
        """
        self.table_name = table_name or os.getenv(TABLE_NAME_ENV)

        if not self.table_name:
            raise ValueError(
                f"Table name must be provided either as parameter or {TABLE_NAME_ENV} environment variable"
            )

        try:
            self.dynamodb = boto3.resource("dynamodb")
            self.table = self.dynamodb.Table(self.table_name)

            # Verify table exists by getting its description
            self.table.load()

        except NoCredentialsError:
            raise
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                raise ValueError(f"DynamoDB table '{self.table_name}' not found") from e
            raise

    def save_session(self, session: WalkSession) -> bool:
        """
        Store a single walk session.

        Returns:
            True if the put succeeded, False otherwise
        """
        try:
            response = self.table.put_item(Item=session.to_dynamodb_item())
            return response["ResponseMetadata"]["HTTPStatusCode"] == 200

        except ClientError as e:
            log_error("SESSION_SAVE_ERROR", str(e), {"session_id": session.id})
            return False

    def save_sessions(self, sessions: Sequence[WalkSession]) -> bool:
        """
        Replace the stored sessions with `sessions`.

        Every session in the list is written, and stored sessions whose id is
        not in the list are deleted, so the table holds exactly the list.

        Args:
            sessions: The pruned session list

        Returns:
            True if all writes succeeded, False otherwise
        """
        keep_ids = {session.id for session in sessions}

        try:
            stale_ids = [sid for sid in self._scan_ids() if sid not in keep_ids]

            with self.table.batch_writer() as batch:
                for session in sessions:
                    batch.put_item(Item=session.to_dynamodb_item())
                for session_id in stale_ids:
                    batch.delete_item(Key={"id": session_id})

            log_event(
                "SESSIONS_SAVED",
                sessionCount=len(keep_ids),
                deletedCount=len(stale_ids),
            )
            return True

        except ClientError as e:
            log_error("SESSIONS_SAVE_ERROR", str(e), {"session_count": len(keep_ids)})
            return False

    def load_sessions(self) -> List[WalkSession]:
        """
        Load all stored walk sessions, oldest first.

        Items that no longer validate are skipped and logged.

        Returns:
            List of WalkSession objects
        """
        try:
            items = self._scan_all()
        except ClientError as e:
            log_error("SESSIONS_LOAD_ERROR", str(e))
            return []

        sessions = []
        for item in items:
            try:
                sessions.append(WalkSession.from_dynamodb_item(item))
            except (ValidationError, TypeError, ValueError) as e:
                log_error("SESSION_DECODE_ERROR", str(e), {"session_id": item.get("id")})
                continue

        # timestamp() orders naive (local) and aware start times together
        sessions.sort(key=lambda s: s.start_time.timestamp())
        return sessions

    def get_session(self, session_id: str) -> Optional[WalkSession]:
        try:
            response = self.table.get_item(Key={"id": session_id})
        except ClientError as e:
            log_error("SESSION_GET_ERROR", str(e), {"session_id": session_id})
            return None

        if "Item" in response:
            return WalkSession.from_dynamodb_item(response["Item"])

        return None

    def clear_sessions(self) -> bool:
        """Delete every stored session (used when the profile is reset)."""
        return self.save_sessions([])

    def _scan_all(self, **scan_kwargs: Any) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        response = self.table.scan(**scan_kwargs)
        items.extend(response.get("Items", []))

        while "LastEvaluatedKey" in response:
            response = self.table.scan(
                ExclusiveStartKey=response["LastEvaluatedKey"], **scan_kwargs
            )
            items.extend(response.get("Items", []))

        return items

    def _scan_ids(self) -> List[str]:
        items = self._scan_all(
            ProjectionExpression="#id", ExpressionAttributeNames={"#id": "id"}
        )
        return [item["id"] for item in items]

    def health_check(self) -> Dict[str, Any]:
        """
        Perform a health check on the DynamoDB service.

        Returns:
            Dictionary with health check results
        """
        try:
            table_description = self.table.meta.client.describe_table(
                TableName=self.table_name
            )

            return {
                "status": "healthy",
                "table_name": self.table_name,
                "table_status": table_description["Table"]["TableStatus"],
                "item_count": table_description["Table"].get("ItemCount", "unknown"),
                "region": self.dynamodb.meta.client.meta.region_name,
            }

        except Exception as e:
            return {
                "status": "unhealthy",
                "error": str(e),
                "table_name": self.table_name,
            }
