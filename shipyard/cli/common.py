"""Collaborator construction shared by the CLI commands."""

import click

from shipyard.config.settings import ShipyardSettings
from shipyard.config.store import YamlConfigStore
from shipyard.secrets.encrypted_backend import EncryptedFileBackend
from shipyard.secrets.keyring_backend import KeyringBackend
from shipyard.secrets.store import BackendSecretsManager
from shipyard.workspace import Workspace


def get_settings(ctx: click.Context) -> ShipyardSettings:
    return ctx.obj["settings"]


def build_store(settings: ShipyardSettings) -> YamlConfigStore:
    return YamlConfigStore(settings.store_path)


def build_workspace(settings: ShipyardSettings) -> Workspace:
    return Workspace(settings.workspace_root)


def build_secrets_manager(settings: ShipyardSettings) -> BackendSecretsManager:
    """Secrets manager for the configured backend."""
    if settings.secrets_backend == "encrypted_file":
        password = settings.master_password.get_secret_value() if settings.master_password else None
        return BackendSecretsManager(EncryptedFileBackend(settings.secrets_file, master_password=password))
    return BackendSecretsManager(KeyringBackend())
