"""Custom exception hierarchy for the shipyard CLI.

This module defines a structured exception hierarchy so that commands can
tell configuration problems, repository problems, and provisioning failures
apart and report them to the user with a clear message.

Exception Hierarchy:
    ShipyardError (base)
    ├── ConfigurationError
    │   ├── ApplicationNotFoundError
    │   └── EnvironmentNotFoundError
    ├── SecretError
    │   ├── SecretAlreadyExistsError
    │   ├── BackendNotAvailableError
    │   └── EncryptionError
    ├── GitOperationError
    │   └── GitDiscoveryError (shipyard.git.exceptions)
    ├── TemplateError
    ├── WorkspaceError
    │   ├── NoAppInWorkspaceError
    │   └── FileExistsInWorkspaceError
    └── PipelineError
        ├── RegionMismatchError
        └── PipelineNameError

Example Usage:
    >>> from shipyard.exceptions import ConfigurationError
    >>> try:
    ...     store.get_application("badgoose")
    ... except KeyError as e:
    ...     raise ConfigurationError("application badgoose is not registered") from e
"""


class ShipyardError(Exception):
    """Base exception for all shipyard errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(ShipyardError):
    """Configuration-related errors.

    Raised when settings files are invalid or when the configuration store
    does not hold the requested record.
    """

    pass


class ApplicationNotFoundError(ConfigurationError):
    """The application is not registered in the configuration store."""

    def __init__(self, app_name: str) -> None:
        super().__init__(f"couldn't find an application named {app_name} in the store")
        self.app_name = app_name


class EnvironmentNotFoundError(ConfigurationError):
    """The environment is not registered under the application."""

    def __init__(self, app_name: str, env_name: str) -> None:
        super().__init__(f"couldn't find environment {env_name} in the application {app_name}")
        self.app_name = app_name
        self.env_name = env_name


class SecretError(ShipyardError):
    """Secret storage errors.

    Attributes:
        message: Human-readable error description
        reference: The secret reference that failed (e.g., "@keyring:pipelines/github-token-app-repo")
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The secret reference that failed
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference
        self.suggestion = suggestion

        full_message = message
        if reference:
            full_message = f"{message} (reference: {reference})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # Keep the short message for CLI output
        self.message = message


class SecretAlreadyExistsError(SecretError):
    """A secret with the same name is already stored.

    Callers that create secrets idempotently treat this as success.
    """

    def __init__(self, secret_name: str, reference: str | None = None) -> None:
        super().__init__(f"secret {secret_name} already exists", reference=reference)
        self.secret_name = secret_name


class BackendNotAvailableError(SecretError):
    """Requested secret backend is not available on this system."""

    pass


class EncryptionError(SecretError):
    """Encryption or decryption of the secrets file failed."""

    pass


class GitOperationError(ShipyardError):
    """Git operation errors.

    Base class for repository discovery and URL classification errors. See
    shipyard.git.exceptions for the specific types.
    """

    pass


class TemplateError(ShipyardError):
    """Template rendering errors.

    Examples:
        - Template file not found
        - Invalid template syntax
        - Missing template variables
    """

    pass


class WorkspaceError(ShipyardError):
    """Errors reading or writing the local shipyard workspace."""

    pass


class NoAppInWorkspaceError(WorkspaceError):
    """The workspace is not linked to an application yet."""

    def __init__(self) -> None:
        super().__init__(
            "couldn't find an application associated with this workspace, run `shipyard app link` first"
        )


class FileExistsInWorkspaceError(WorkspaceError):
    """A file the workspace was asked to create is already present.

    Attributes:
        file_name: Path of the existing file
    """

    def __init__(self, file_name: str) -> None:
        super().__init__(f"file {file_name} already exists")
        self.file_name = file_name


class PipelineError(ShipyardError):
    """Pipeline bootstrapping errors.

    Stage failures are wrapped with a prefix naming the stage, for example
    ``get application badgoose: <cause>``.
    """

    pass


class RegionMismatchError(PipelineError):
    """A CodeCommit repository lives outside the application's region."""

    def __init__(self, repo_name: str, repo_region: str, app_name: str, app_region: str) -> None:
        super().__init__(
            f"repository {repo_name} is in {repo_region}, but app {app_name} is in {app_region}; "
            "they must be in the same region"
        )
        self.repo_name = repo_name
        self.repo_region = repo_region
        self.app_name = app_name
        self.app_region = app_region


class PipelineNameError(PipelineError):
    """The application name leaves no room for the repository in the pipeline name."""

    pass
