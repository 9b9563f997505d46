"""Protocol for the storage backends behind the pipeline secrets manager."""

from typing import Protocol


class SecretBackend(Protocol):
    """Interface every secret storage backend implements.

    Secrets are addressed by a service namespace and a key. The secrets
    manager stores pipeline secrets under the ``pipelines`` service.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'keyring', 'encrypted_file')."""
        ...

    @property
    def available(self) -> bool:
        """Check if this backend is usable on the current system."""
        ...

    def get(self, service: str, key: str) -> str | None:
        """Retrieve a secret.

        Args:
            service: Service namespace (e.g., 'pipelines')
            key: Secret name within the namespace

        Returns:
            Secret value or None if not stored

        Raises:
            BackendNotAvailableError: If backend is not available
        """
        ...

    def set(self, service: str, key: str, value: str) -> None:
        """Store a secret, replacing any previous value.

        Raises:
            BackendNotAvailableError: If backend is not available
        """
        ...
