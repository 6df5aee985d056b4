"""Base repository for records stored in the shared entities table."""

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from supabase import Client

from ats.constants import ENTITIES_TABLE
from ats.utils.date_utils import utc_now

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseRepository:
    """Base repository providing common operations over the entities table.

    Every domain record lives in one table as a JSONB payload tagged with its
    entity type. Deletes are soft: they stamp deleted_at and the record
    disappears from every read.

    Attributes:
        db_client: Supabase client instance for database operations.
        entity_type: Entity type tag (e.g., "JOB", "CANDIDATE").
        table_name: Name of the database table.
    """

    def __init__(self, db_client: Client, entity_type: str, table_name: str = ENTITIES_TABLE):
        """Initialize the base repository.

        Args:
            db_client: Supabase client instance.
            entity_type: Entity type tag this repository manages.
            table_name: Table holding the entities.
        """
        self.db_client = db_client
        self.entity_type = entity_type
        self.table_name = table_name

    def _active_query(self):
        return (
            self.db_client.table(self.table_name)
            .select("*")
            .eq("type", self.entity_type)
            .is_("deleted_at", "null")
        )

    def get_row(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Retrieve a single live row by its ID.

        Args:
            record_id: The unique identifier of the record.

        Returns:
            Row as dictionary if found, None otherwise.

        Raises:
            Exception: If database query fails.
        """
        try:
            response = self._active_query().eq("id", record_id).limit(1).execute()
            return response.data[0] if response.data else None
        except Exception as error:
            raise Exception(f"Failed to get {self.entity_type} by ID: {str(error)}")

    def get_rows(self) -> List[Dict[str, Any]]:
        """Retrieve all live rows of this entity type.

        Returns:
            List of rows as dictionaries.

        Raises:
            Exception: If database query fails.

        Note:
            This loads every record of the type into memory, which is how the
            reports consume them.
        """
        try:
            response = self._active_query().execute()
            return response.data
        except Exception as error:
            raise Exception(f"Failed to get all {self.entity_type}: {str(error)}")

    def save_row(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or replace a row, clearing any previous soft delete.

        Args:
            row: Dictionary with id, type and data keys.

        Returns:
            The stored row.

        Raises:
            Exception: If the upsert fails.
        """
        try:
            payload = dict(row)
            payload["deleted_at"] = None
            response = self.db_client.table(self.table_name).upsert(payload).execute()
            return response.data[0] if response.data else payload
        except Exception as error:
            raise Exception(f"Failed to save {self.entity_type}: {str(error)}")

    def soft_delete(self, record_id: str) -> bool:
        """Mark a row as deleted.

        Args:
            record_id: The unique identifier of the record to delete.

        Returns:
            True if deletion was successful.

        Raises:
            Exception: If the update fails.
        """
        try:
            (
                self.db_client.table(self.table_name)
                .update({"deleted_at": utc_now().isoformat()})
                .eq("id", record_id)
                .execute()
            )
            return True
        except Exception as error:
            raise Exception(f"Failed to delete {self.entity_type}: {str(error)}")

    def load_all(self, converter: Callable[[Dict[str, Any]], ModelT]) -> List[ModelT]:
        """Convert every live row, skipping records that fail validation.

        A single corrupt record is logged and left out so that reports built
        on the rest still render.

        Args:
            converter: Row-to-model function.

        Returns:
            List of converted models.
        """
        models = []
        for row in self.get_rows():
            try:
                models.append(converter(row))
            except ValueError as error:
                logger.warning(f"Skipping {self.entity_type} {row.get('id')}: {error}")
        return models
