"""Encrypted file backend using Fernet symmetric encryption.

Security Model:
- Key derived from a master password with PBKDF2-HMAC-SHA256
- Secrets encrypted with Fernet (AES-128-CBC + HMAC)
- Salt stored beside the secrets file as ``secrets.salt``
- Intended for CI runners and other hosts without an OS keyring
"""

import base64
import json
import logging
import secrets
from pathlib import Path
from typing import cast

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from shipyard.exceptions import EncryptionError

logger = logging.getLogger(__name__)

KDF_ITERATIONS = 480_000


class EncryptedFileBackend:
    """Secret storage in a single Fernet-encrypted JSON file.

    The decrypted payload maps service -> {key -> value}. Writes go through a
    temporary file that is renamed over the original.

    Example:
        >>> backend = EncryptedFileBackend(
        ...     file_path=Path("shipyard/.secrets/secrets.enc"),
        ...     master_password="correct horse battery staple",
        ... )
        >>> backend.set("pipelines", "github-token-demo-repo-man", "ghp_abc123")
    """

    def __init__(
        self,
        file_path: Path,
        master_password: str | None = None,
        salt: bytes | None = None,
    ) -> None:
        """Initialize encrypted file backend.

        Args:
            file_path: Path to the encrypted secrets file
            master_password: Password the key is derived from
            salt: Cryptographic salt (loaded or generated on first use if not provided)
        """
        self.file_path = Path(file_path)
        self._master_password = master_password
        self._salt = salt
        self._fernet: Fernet | None = None
        self._cache: dict[str, dict[str, str]] | None = None

    @property
    def name(self) -> str:
        return "encrypted_file"

    @property
    def available(self) -> bool:
        """Usable once a master password has been supplied."""
        return bool(self._master_password)

    @property
    def salt(self) -> bytes:
        if self._salt is None:
            self._salt = self._load_or_generate_salt()
        return self._salt

    @staticmethod
    def _create_fernet(password: str, salt: bytes) -> Fernet:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=KDF_ITERATIONS,
        )
        key = kdf.derive(password.encode("utf-8"))
        return Fernet(base64.urlsafe_b64encode(key))

    def _get_fernet(self) -> Fernet:
        """Derive the key on first use; nothing touches disk before then.

        Raises:
            EncryptionError: If no master password was given
        """
        if not self._master_password:
            raise EncryptionError(
                "Master password not provided",
                suggestion="Set SHIPYARD_MASTER_PASSWORD",
            )
        if self._fernet is None:
            self._fernet = self._create_fernet(self._master_password, self.salt)
        return self._fernet

    def _load_or_generate_salt(self) -> bytes:
        salt_file = self.file_path.parent / "secrets.salt"

        if salt_file.exists():
            return salt_file.read_bytes()

        salt = secrets.token_bytes(16)
        salt_file.parent.mkdir(parents=True, exist_ok=True)
        salt_file.write_bytes(salt)
        try:
            salt_file.chmod(0o600)
        except OSError as e:
            logger.warning(f"Could not set salt file permissions: {e}")
        return salt

    def _load(self) -> dict[str, dict[str, str]]:
        """Load and decrypt the secrets file.

        Raises:
            EncryptionError: If no password was given or decryption fails
        """
        if self._cache is not None:
            return self._cache

        if not self.file_path.exists():
            self._cache = {}
            return self._cache

        fernet = self._get_fernet()
        try:
            decrypted = fernet.decrypt(self.file_path.read_bytes())
            data = cast(dict[str, dict[str, str]], json.loads(decrypted.decode("utf-8")))
        except InvalidToken as e:
            raise EncryptionError(
                "Invalid master password or corrupted secrets file",
                suggestion="Verify your master password",
            ) from e
        except json.JSONDecodeError as e:
            raise EncryptionError(
                "Secrets file is corrupted",
                suggestion="Restore from backup or delete and recreate",
            ) from e
        except OSError as e:
            raise EncryptionError(f"Failed to load secrets: {e}") from e

        self._cache = data
        return data

    def _save(self, data: dict[str, dict[str, str]]) -> None:
        fernet = self._get_fernet()
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            encrypted = fernet.encrypt(json.dumps(data, indent=2).encode("utf-8"))

            temp_file = self.file_path.with_suffix(".tmp")
            temp_file.write_bytes(encrypted)
            try:
                temp_file.chmod(0o600)
            except OSError as e:
                logger.warning(f"Could not set file permissions: {e}")
            temp_file.replace(self.file_path)
        except OSError as e:
            raise EncryptionError(f"Failed to save secrets: {e}") from e

        self._cache = data
        logger.debug(f"Saved secrets to {self.file_path}")

    def get(self, service: str, key: str) -> str | None:
        """Retrieve a secret from the encrypted file.

        Raises:
            EncryptionError: If decryption fails
        """
        return self._load().get(service, {}).get(key)

    def set(self, service: str, key: str, value: str) -> None:
        """Store a secret in the encrypted file.

        Raises:
            EncryptionError: If encryption fails
            ValueError: If value is empty
        """
        if not value:
            raise ValueError("Secret value cannot be empty")

        data = self._load()
        data.setdefault(service, {})[key] = value
        self._save(data)
        logger.info(f"Stored secret in encrypted file: {service}/{key}")
