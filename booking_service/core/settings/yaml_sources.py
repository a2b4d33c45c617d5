"""YAML config source with conf.d directory support.

Extends pydantic-settings ``YamlConfigSettingsSource`` so each settings
domain can be configured from:

- ``conf/<domain>.yaml`` (base file)
- ``conf/<domain>.d/*.yaml`` (overrides, merged alphabetically)

The base directory can be moved per domain with ``<DOMAIN>_CONFIG_DIR``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings.sources.providers.yaml import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source reading a base file plus a conf.d directory."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: str = "app.yaml",
        confd_dir: str | None = "app.d",
        config_dir_env: str = "CONFIG_DIR",
        base_dir: str = "conf",
        yaml_file_encoding: str | None = "utf-8",
    ) -> None:
        config_base = Path(os.getenv(config_dir_env, base_dir))

        yaml_files: list[Path] = []
        main_file = config_base / yaml_file
        if main_file.exists():
            yaml_files.append(main_file)

        if confd_dir:
            confd_path = config_base / confd_dir
            if confd_path.is_dir():
                yaml_files.extend(sorted(confd_path.glob("*.yaml")))
                yaml_files.extend(sorted(confd_path.glob("*.yml")))

        self._yaml_files = yaml_files

        super().__init__(
            settings_cls=settings_cls,
            yaml_file=yaml_files or None,
            yaml_file_encoding=yaml_file_encoding,
        )

    def __repr__(self) -> str:
        """Return a summary of the YAML files this source reads."""
        files_str = ", ".join(str(f) for f in self._yaml_files)
        return f"{self.__class__.__name__}(yaml_files=[{files_str}])"


def create_yaml_source(
    settings_cls: type[BaseSettings],
    domain: str,
) -> ConfDYamlConfigSettingsSource:
    """Create the YAML source for one settings domain.

    Loads ``conf/<domain>.yaml`` and ``conf/<domain>.d/*.yaml``; the base
    directory is overridden with ``<DOMAIN>_CONFIG_DIR``.

    Example:
        create_yaml_source(PostgresSettings, "db")  # conf/db.yaml, DB_CONFIG_DIR
    """
    return ConfDYamlConfigSettingsSource(
        settings_cls,
        yaml_file=f"{domain}.yaml",
        confd_dir=f"{domain}.d",
        config_dir_env=f"{domain.upper()}_CONFIG_DIR",
    )
