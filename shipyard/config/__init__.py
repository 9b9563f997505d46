"""Settings, configuration store and session."""

from shipyard.config.session import Session, SessionProvider, SettingsSessionProvider
from shipyard.config.settings import ShipyardSettings
from shipyard.config.store import (
    Application,
    AppRegionalResources,
    AppResourcesGetter,
    ConfigStore,
    Environment,
    YamlConfigStore,
)

__all__ = [
    "AppRegionalResources",
    "AppResourcesGetter",
    "Application",
    "ConfigStore",
    "Environment",
    "Session",
    "SessionProvider",
    "SettingsSessionProvider",
    "ShipyardSettings",
    "YamlConfigStore",
]
