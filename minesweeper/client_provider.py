import os
import pathlib
import platform
from typing import Optional

from temporalio.client import Client
from temporalio.envconfig import ClientConfig

from minesweeper.config import Settings, settings as default_settings


# Connects to Temporal. When a profile is configured and Temporal's
# temporal.toml exists, the profile decides the connection; otherwise the
# address and namespace from the settings are used.
async def get_temporal_client(settings: Optional[Settings] = None) -> Client:
    settings = settings or default_settings
    config_file_path = get_config_file_path()
    if settings.profile and config_file_path.is_file():
        connect_config = ClientConfig.load_client_connect_config(
            profile=settings.profile,
            config_file=str(config_file_path),
        )
        return await Client.connect(**connect_config)
    return await Client.connect(settings.address, namespace=settings.namespace)


# Default location of temporal.toml for the current operating system.
def get_config_file_path() -> pathlib.Path:
    home = pathlib.Path.home()
    system = platform.system()

    if system == "Darwin":
        return home / "Library/Application Support/temporalio/temporal.toml"
    if system == "Windows":
        app_data = os.getenv("AppData")
        if app_data is None:
            raise RuntimeError("AppData environment variable not set")
        return pathlib.Path(app_data) / "temporalio/temporal.toml"

    xdg_config_home = os.getenv("XDG_CONFIG_HOME")
    config_home = pathlib.Path(xdg_config_home) if xdg_config_home else home / ".config"
    return config_home / "temporalio/temporal.toml"
