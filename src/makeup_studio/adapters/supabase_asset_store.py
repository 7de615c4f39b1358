"""Supabase Storage bucket adapter."""

from dataclasses import dataclass

from supabase import Client

from makeup_studio.services.assets import AssetStore

_CACHE_CONTROL_SECONDS = "3600"


@dataclass
class SupabaseAssetStore(AssetStore):
    """Supabase Storage implementation of the asset bucket."""

    client: Client
    bucket: str

    def upload(self, content: bytes, path: str, content_type: str) -> str:
        """Upload bytes without overwriting and return the stored path."""
        self.client.storage.from_(self.bucket).upload(
            path=path,
            file=content,
            file_options={
                "cache-control": _CACHE_CONTROL_SECONDS,
                "content-type": content_type,
                "upsert": "false",
            },
        )
        return path

    def get_public_url(self, path: str) -> str:
        """Return the public URL of a stored object."""
        return self.client.storage.from_(self.bucket).get_public_url(path)

    def remove(self, paths: list[str]) -> None:
        """Delete stored objects."""
        self.client.storage.from_(self.bucket).remove(paths)
