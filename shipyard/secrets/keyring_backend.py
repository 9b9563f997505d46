"""OS-level keyring backend using system credential stores.

Platform Support:
- Linux: Secret Service API (GNOME Keyring, KWallet)
- macOS: Keychain
- Windows: Windows Credential Locker
"""

import logging
from typing import cast

import keyring
from keyring.errors import KeyringError

from shipyard.exceptions import BackendNotAvailableError, SecretError

logger = logging.getLogger(__name__)

NAMESPACE = "shipyard"


class KeyringBackend:
    """Secret storage in the OS keyring.

    Every service is namespaced under ``shipyard/`` so pipeline secrets never
    collide with other applications' keyring entries.

    Example:
        >>> backend = KeyringBackend()
        >>> backend.set("pipelines", "github-token-demo-repo-man", "ghp_abc123")
        >>> backend.get("pipelines", "github-token-demo-repo-man")
        'ghp_abc123'
    """

    @property
    def name(self) -> str:
        return "keyring"

    @property
    def available(self) -> bool:
        """Check if a functional keyring backend is configured.

        Headless systems usually only have the ``fail`` keyring, which
        counts as unavailable.
        """
        try:
            current = keyring.get_keyring()
        except KeyringError as e:
            logger.debug(f"Keyring not available: {e}")
            return False
        return type(current).__module__ != "keyring.backends.fail"

    def _require_available(self) -> None:
        if not self.available:
            raise BackendNotAvailableError(
                "Keyring backend is not available",
                suggestion="Set SHIPYARD_SECRETS_BACKEND=encrypted_file on systems without a keyring",
            )

    def get(self, service: str, key: str) -> str | None:
        """Retrieve a secret from the OS keyring.

        Raises:
            BackendNotAvailableError: If keyring is not available
            SecretError: If the keyring operation fails
        """
        self._require_available()

        try:
            value = cast(str | None, keyring.get_password(f"{NAMESPACE}/{service}", key))
        except KeyringError as e:
            raise SecretError(f"Keyring operation failed: {e}", reference=f"@keyring:{service}/{key}") from e

        if value is not None:
            logger.debug(f"Retrieved secret from keyring: {service}/{key}")
        return value

    def set(self, service: str, key: str, value: str) -> None:
        """Store a secret in the OS keyring.

        Raises:
            BackendNotAvailableError: If keyring is not available
            SecretError: If the keyring operation fails
            ValueError: If value is empty
        """
        self._require_available()

        if not value:
            raise ValueError("Secret value cannot be empty")

        try:
            keyring.set_password(f"{NAMESPACE}/{service}", key, value)
        except KeyringError as e:
            raise SecretError(f"Failed to store secret: {e}", reference=f"@keyring:{service}/{key}") from e
        logger.info(f"Stored secret in keyring: {service}/{key}")
