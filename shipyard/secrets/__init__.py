"""Secret storage for pipeline credentials.

Backends:
    KeyringBackend: OS keychain (default)
    EncryptedFileBackend: Fernet-encrypted file for hosts without a keyring
"""

from shipyard.secrets.encrypted_backend import EncryptedFileBackend
from shipyard.secrets.keyring_backend import KeyringBackend
from shipyard.secrets.store import BackendSecretsManager, SecretsManager

__all__ = [
    "BackendSecretsManager",
    "EncryptedFileBackend",
    "KeyringBackend",
    "SecretsManager",
]
