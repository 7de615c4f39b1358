"""Supabase repository for admin profiles."""

from dataclasses import dataclass

from supabase import Client

from makeup_studio.adapters.supabase_query import (
    first_row,
    optional_text,
    parse_timestamp,
    run_query,
)
from makeup_studio.domain.content import AdminProfile
from makeup_studio.services.content import ProfileRepository

_PROFILE_COLUMNS = (
    "id, user_id, email, bio, bio_2, about_image_1, about_image_2, "
    "about_image_1_path, about_image_2_path, created_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the ``admin_users`` table."""

    client: Client

    def get_by_user_id(self, user_id: str) -> AdminProfile | None:
        """Return the profile bound to an auth identity, if present."""
        rows = run_query(
            self.client.table("admin_users")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", user_id)
            .limit(1),
            "Fetch admin profile",
        )
        return _parse_profile(rows[0]) if rows else None

    def list_by_email(self, email: str) -> list[AdminProfile]:
        """Return profiles registered with an email."""
        rows = run_query(
            self.client.table("admin_users")
            .select(_PROFILE_COLUMNS)
            .eq("email", email)
            .order("created_at", desc=False),
            "List admin profiles by email",
        )
        return [_parse_profile(row) for row in rows]

    def list_profiles(self, limit: int) -> list[AdminProfile]:
        """Return profiles, oldest first."""
        rows = run_query(
            self.client.table("admin_users")
            .select(_PROFILE_COLUMNS)
            .order("created_at", desc=False)
            .limit(limit),
            "List admin profiles",
        )
        return [_parse_profile(row) for row in rows]

    def create_profile(self, user_id: str, email: str) -> AdminProfile:
        """Insert a profile row for an identity and return it."""
        rows = run_query(
            self.client.table("admin_users").insert(
                {"user_id": user_id, "email": email}
            ),
            "Create admin profile",
        )
        return _parse_profile(first_row(rows, "Create admin profile"))

    def update_profile(
        self, profile_id: str, payload: dict[str, object]
    ) -> AdminProfile:
        """Update profile columns and return the profile."""
        rows = run_query(
            self.client.table("admin_users").update(payload).eq("id", profile_id),
            "Update admin profile",
        )
        return _parse_profile(first_row(rows, "Update admin profile"))


def _parse_profile(row: dict[str, object]) -> AdminProfile:
    return AdminProfile(
        id=str(row["id"]),
        user_id=optional_text(row.get("user_id")),
        email=str(row.get("email") or ""),
        bio=optional_text(row.get("bio")),
        bio_2=optional_text(row.get("bio_2")),
        about_image_1=optional_text(row.get("about_image_1")),
        about_image_1_path=optional_text(row.get("about_image_1_path")),
        about_image_2=optional_text(row.get("about_image_2")),
        about_image_2_path=optional_text(row.get("about_image_2_path")),
        created_at=parse_timestamp(row.get("created_at")),
    )
