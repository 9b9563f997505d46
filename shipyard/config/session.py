"""Default session carrying the region the CLI operates in."""

from dataclasses import dataclass
from typing import Protocol

from shipyard.config.settings import ShipyardSettings
from shipyard.exceptions import ConfigurationError


@dataclass(frozen=True)
class Session:
    region: str


class SessionProvider(Protocol):
    def default(self) -> Session:
        """Return the default session.

        Raises:
            ConfigurationError: If no region is configured
        """
        ...


class SettingsSessionProvider:
    """SessionProvider reading the region from ShipyardSettings."""

    def __init__(self, settings: ShipyardSettings) -> None:
        self.settings = settings

    def default(self) -> Session:
        if not self.settings.region:
            raise ConfigurationError(
                "missing region configuration, set SHIPYARD_REGION or AWS_REGION"
            )
        return Session(region=self.settings.region)
