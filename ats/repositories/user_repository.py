"""Repository for application users."""

from typing import List, Optional

from supabase import Client

from ats.constants import USERS_TABLE
from ats.models import User
from ats.transformers.entity_rows import db_row_to_user


class UserRepository:
    """Read access to the users table.

    User management and credentials live outside this service; only the
    identity and role are read here.

    Attributes:
        db_client: Supabase client instance for database operations.
    """

    def __init__(self, db_client: Client):
        """Initialize the repository with a database client.

        Args:
            db_client: Supabase client instance.
        """
        self.db_client = db_client

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve a live user by ID.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            User if found, None otherwise.
        """
        try:
            response = (
                self.db_client.table(USERS_TABLE)
                .select("id, username, name, role, created_by")
                .eq("id", user_id)
                .is_("deleted_at", "null")
                .limit(1)
                .execute()
            )
        except Exception as error:
            raise Exception(f"Failed to get user by ID: {str(error)}")

        return db_row_to_user(response.data[0]) if response.data else None

    def get_all(self) -> List[User]:
        """Retrieve all live users."""
        try:
            response = (
                self.db_client.table(USERS_TABLE)
                .select("id, username, name, role, created_by")
                .is_("deleted_at", "null")
                .execute()
            )
        except Exception as error:
            raise Exception(f"Failed to get all users: {str(error)}")

        return [db_row_to_user(row) for row in response.data]
