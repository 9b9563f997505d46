"""Read-only configuration store of applications and their environments.

The store is a single YAML document:

    applications:
      demo:
        account_id: "123456789012"
        domain: example.com
        environments:
          test:
            region: us-west-2
            account_id: "123456789012"
          prod:
            region: us-east-1
            account_id: "210987654321"
            prod: true
        resources:
          - region: us-west-2
            s3_bucket: demo-pipeline-artifacts-us-west-2
            kms_key_arn: arn:aws:kms:us-west-2:123456789012:key/abcd

Nothing in the pipeline flow writes to the store.
"""

from pathlib import Path
from typing import Any, Protocol

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from shipyard.exceptions import (
    ApplicationNotFoundError,
    ConfigurationError,
    EnvironmentNotFoundError,
)

log = structlog.get_logger(__name__)


class Application(BaseModel):
    """A registered application."""

    name: str
    account_id: str = ""
    domain: str = ""


class Environment(BaseModel):
    """A deployment environment registered under an application."""

    app: str
    name: str
    region: str
    account_id: str = ""
    prod: bool = False


class AppRegionalResources(BaseModel):
    """Per-region resources the application's pipelines deploy through."""

    region: str
    s3_bucket: str
    kms_key_arn: str = ""


class _EnvironmentRecord(BaseModel):
    region: str
    account_id: str = ""
    prod: bool = False


class _ApplicationRecord(BaseModel):
    account_id: str = ""
    domain: str = ""
    environments: dict[str, _EnvironmentRecord] = Field(default_factory=dict)
    resources: list[AppRegionalResources] = Field(default_factory=list)


class _StoreDocument(BaseModel):
    applications: dict[str, _ApplicationRecord] = Field(default_factory=dict)


class ConfigStore(Protocol):
    """Lookup of applications and environments."""

    def get_application(self, name: str) -> Application: ...

    def get_environment(self, app_name: str, env_name: str) -> Environment: ...

    def list_environments(self, app_name: str) -> list[Environment]: ...


class AppResourcesGetter(Protocol):
    """Lookup of the regional resources backing an application."""

    def get_regional_app_resources(self, app: Application) -> list[AppRegionalResources]: ...


class YamlConfigStore:
    """ConfigStore and AppResourcesGetter backed by a YAML file.

    The file is read lazily on first lookup and cached for the lifetime of
    the instance. A missing file behaves as an empty store.

    Attributes:
        path: Location of the store document
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._document: _StoreDocument | None = None

    def _load(self) -> _StoreDocument:
        if self._document is not None:
            return self._document

        if not self.path.exists():
            log.debug("config_store_missing", path=str(self.path))
            self._document = _StoreDocument()
            return self._document

        try:
            raw: Any = yaml.safe_load(self.path.read_text()) or {}
        except OSError as e:
            raise ConfigurationError(f"read configuration store {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid YAML in configuration store {self.path}: {e}") from e

        try:
            self._document = _StoreDocument.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"invalid configuration store {self.path}: {e}") from e
        return self._document

    def _record(self, name: str) -> _ApplicationRecord:
        record = self._load().applications.get(name)
        if record is None:
            raise ApplicationNotFoundError(name)
        return record

    def get_application(self, name: str) -> Application:
        """Return the application named ``name``.

        Raises:
            ApplicationNotFoundError: If it is not registered
            ConfigurationError: If the store document is invalid
        """
        record = self._record(name)
        return Application(name=name, account_id=record.account_id, domain=record.domain)

    def get_environment(self, app_name: str, env_name: str) -> Environment:
        """Return environment ``env_name`` of application ``app_name``.

        Raises:
            ApplicationNotFoundError: If the application is not registered
            EnvironmentNotFoundError: If the environment is not registered
        """
        env = self._record(app_name).environments.get(env_name)
        if env is None:
            raise EnvironmentNotFoundError(app_name, env_name)
        return Environment(app=app_name, name=env_name, region=env.region, account_id=env.account_id, prod=env.prod)

    def list_environments(self, app_name: str) -> list[Environment]:
        """Environments of an application in document order."""
        return [
            Environment(app=app_name, name=name, region=env.region, account_id=env.account_id, prod=env.prod)
            for name, env in self._record(app_name).environments.items()
        ]

    def get_regional_app_resources(self, app: Application) -> list[AppRegionalResources]:
        """Return the per-region resources of ``app``.

        Raises:
            ApplicationNotFoundError: If the application is not registered
        """
        return list(self._record(app.name).resources)
