"""
Backend locator for stack state.
"""

from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidLocator

BACKEND_SCHEME = "s3"
SECRETS_SCHEME = "awskms"


@dataclass(frozen=True)
class BackendLocator:
    """Where stack state lives and, optionally, which key encrypts its secrets."""
    storage_id: str
    path_prefix: str = ""
    key_id: Optional[str] = None
    scheme: str = BACKEND_SCHEME
    secrets_scheme: str = SECRETS_SCHEME

    @property
    def backend_url(self) -> str:
        """Backend URL, e.g. s3://bucket/prefix."""
        if self.path_prefix:
            return f"{self.scheme}://{self.storage_id}/{self.path_prefix}"
        return f"{self.scheme}://{self.storage_id}"

    @property
    def requires_secrets_provider(self) -> bool:
        return self.key_id is not None

    @property
    def secrets_provider(self) -> Optional[str]:
        """Secrets provider URI, e.g. awskms://<key id>, or None without a key."""
        if self.key_id is None:
            return None
        return f"{self.secrets_scheme}://{self.key_id}"


def build_locator(
    storage_id: str,
    path_prefix: str = "",
    key_id: Optional[str] = None,
    scheme: str = BACKEND_SCHEME,
    secrets_scheme: str = SECRETS_SCHEME,
) -> BackendLocator:
    """
    Build a BackendLocator from resolved resources.

    Provider responses may prefix bucket locations with "/", which is
    stripped. Surrounding separators on the prefix are dropped as well.

    Raises:
        InvalidLocator: If no storage id remains
    """
    storage_id = (storage_id or "").lstrip("/")
    if not storage_id:
        raise InvalidLocator("Storage location cannot be empty")

    return BackendLocator(
        storage_id=storage_id,
        path_prefix=(path_prefix or "").strip("/"),
        key_id=key_id or None,
        scheme=scheme,
        secrets_scheme=secrets_scheme,
    )
