"""Pipeline secret creation on top of a storage backend.

Example:
    >>> from shipyard.secrets.keyring_backend import KeyringBackend
    >>> manager = BackendSecretsManager(KeyringBackend())
    >>> manager.create_secret("github-token-demo-repo-man", "ghp_abc123")
    '@keyring:pipelines/github-token-demo-repo-man'
"""

import logging
from typing import Protocol

from shipyard.exceptions import SecretAlreadyExistsError, SecretError
from shipyard.secrets.backend import SecretBackend

logger = logging.getLogger(__name__)

PIPELINE_SERVICE = "pipelines"


class SecretsManager(Protocol):
    """Creates named secrets."""

    def create_secret(self, name: str, value: str) -> str:
        """Create a secret and return its reference.

        Raises:
            SecretAlreadyExistsError: If a secret with this name is stored already
            SecretError: On any other storage failure
        """
        ...


class BackendSecretsManager:
    """SecretsManager that stores pipeline secrets in a SecretBackend.

    Creation never overwrites: a second create with the same name raises
    SecretAlreadyExistsError and leaves the stored value untouched.

    Attributes:
        backend: Storage backend
    """

    def __init__(self, backend: SecretBackend) -> None:
        self.backend = backend

    def reference(self, name: str) -> str:
        """Reference string for a pipeline secret, e.g. '@keyring:pipelines/NAME'."""
        return f"@{self.backend.name}:{PIPELINE_SERVICE}/{name}"

    def create_secret(self, name: str, value: str) -> str:
        reference = self.reference(name)
        if not value:
            raise SecretError("secret value cannot be empty", reference=reference)

        if self.backend.get(PIPELINE_SERVICE, name) is not None:
            raise SecretAlreadyExistsError(name, reference=reference)

        self.backend.set(PIPELINE_SERVICE, name, value)
        logger.info(f"Created pipeline secret {reference}")
        return reference
