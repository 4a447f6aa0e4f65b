"""
User repository for database access.

Encapsulates all Supabase queries against the users table.
"""

import re
from datetime import datetime
from typing import Any, Optional

from postgrest.types import CountMethod

from shared.exceptions import DuplicateRecordError
from shared.repository import BaseRepository

from .exceptions import EmailAlreadyRegisteredError
from .models import UserRecord, UserSummary

USERS_TABLE = "users"
SUMMARY_COLUMNS = "id,email,full_name,email_verified,is_banned,is_admin,created_at"

# Characters with meaning inside a PostgREST or= filter or an ilike pattern
SEARCH_SPECIAL_CHARS = re.compile(r'[,()*%\\:"]')


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for the users table.

    Note: This repository does NOT perform authorization checks and does
    not normalize emails; callers pass the canonical lowercase form.
    """

    def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._get_one("get_user_by_id", "id", user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._get_one("get_user_by_email", "email", email)

    def get_user_by_verification_token(self, token: str) -> Optional[UserRecord]:
        return self._get_one("get_user_by_verification_token", "verification_token", token)

    def create_user(self, fields: dict[str, Any]) -> UserRecord:
        try:
            rows = self._execute(
                "create_user",
                self._db.table(USERS_TABLE).insert(fields),
            )
        except DuplicateRecordError:
            raise EmailAlreadyRegisteredError()
        return UserRecord(**rows[0])

    def update_user(self, user_id: str, fields: dict[str, Any]) -> Optional[UserRecord]:
        rows = self._execute(
            "update_user",
            self._db.table(USERS_TABLE).update(fields).eq("id", user_id),
        )
        return UserRecord(**rows[0]) if rows else None

    def consume_verification_token(self, token: str, now: datetime) -> Optional[UserRecord]:
        """
        Verify the user holding `token` in a single conditional UPDATE.

        The filters make the check and the write one statement, so two
        concurrent requests cannot both consume the same token.
        """
        rows = self._execute(
            "consume_verification_token",
            self._db.table(USERS_TABLE)
            .update(
                {
                    "email_verified": True,
                    "verification_token": None,
                    "verification_token_expires": None,
                }
            )
            .eq("verification_token", token)
            .eq("email_verified", False)
            .gt("verification_token_expires", now.isoformat()),
        )
        return UserRecord(**rows[0]) if rows else None

    def list_users(
        self, offset: int, limit: int, search: Optional[str] = None
    ) -> tuple[list[UserSummary], int]:
        """
        Page through users, newest first.

        `search` matches a substring of the email or the full name, case
        insensitively. Returns the page and the total number of matches.
        Only summary columns are selected, so no secret leaves the store.
        """
        query = self._db.table(USERS_TABLE).select(SUMMARY_COLUMNS, count=CountMethod.exact)
        term = SEARCH_SPECIAL_CHARS.sub("", search or "").strip()
        if term:
            query = query.or_(f"email.ilike.*{term}*,full_name.ilike.*{term}*")
        rows, total = self._execute_counted(
            "list_users",
            query.order("created_at", desc=True).range(offset, offset + limit - 1),
        )
        return [UserSummary(**row) for row in rows], total

    def _get_one(self, operation: str, column: str, value: str) -> Optional[UserRecord]:
        rows = self._execute(
            operation,
            self._db.table(USERS_TABLE).select("*").eq(column, value).limit(1),
        )
        if not rows:
            return None
        return UserRecord(**rows[0])
