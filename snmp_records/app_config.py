"""Client configuration loaded from YAML through Dynaconf."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dynaconf import Dynaconf

DEFAULT_CONFIG = "client_config.yaml"
ENVVAR_PREFIX = "SNMP_RECORDS"


def locate_config(config_path: str = DEFAULT_CONFIG) -> Path:
    """
    Return the file to load for ``config_path``.

    The default name resolves to ``data/client_config.yaml`` when that file
    exists, then to ``client_config.yaml`` in the working directory.

    Raises:
        FileNotFoundError: If no candidate file exists
    """
    candidates = [Path(config_path)]
    if config_path == DEFAULT_CONFIG:
        candidates.insert(0, Path("data") / DEFAULT_CONFIG)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(f"Config file {config_path} not found")


class AppConfig:
    """Settings for the SNMP client and the CLI tools.

    Keys are dotted (``snmp.community``). Environment variables such as
    ``SNMP_RECORDS_SNMP__COMMUNITY`` override values from the file.
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG) -> None:
        self.config_path = str(locate_config(config_path))
        self.settings = Dynaconf(
            settings_files=[self.config_path],
            environments=False,
            envvar_prefix=ENVVAR_PREFIX,
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def reload(self) -> None:
        """Re-read the file and the environment."""
        self.settings.reload()
