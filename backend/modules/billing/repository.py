"""
Profile repository for database access.

Encapsulates all Supabase queries against the profiles table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

from .models import Profile

PROFILES_TABLE = "profiles"


class ProfileRepository(BaseRepository[Profile]):
    """Repository for the profiles table."""

    def get_profile(self, user_id: str) -> Optional[Profile]:
        rows = self._execute(
            "get_profile",
            self._db.table(PROFILES_TABLE).select("*").eq("id", user_id).limit(1),
        )
        return Profile(**rows[0]) if rows else None

    def insert_profile_if_absent(self, user_id: str, fields: dict[str, Any]) -> None:
        # INSERT ... ON CONFLICT (id) DO NOTHING
        self._execute(
            "insert_profile_if_absent",
            self._db.table(PROFILES_TABLE).upsert(
                {**fields, "id": user_id},
                on_conflict="id",
                ignore_duplicates=True,
            ),
        )

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> Optional[Profile]:
        rows = self._execute(
            "update_profile",
            self._db.table(PROFILES_TABLE).update(fields).eq("id", user_id),
        )
        return Profile(**rows[0]) if rows else None
