"""Configuration: the fixed names and paths a sync invocation works with.

Defaults match a Maven module built with the ``maven-bundle-plugin``. Every
value can be overridden from a YAML file so the core can be pointed at
synthetic layouts in tests or at a differently named plugin.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from bundlesync.errors import ConfigError

DEFAULT_LICENSE_HEADER = """\
<!--
/**
 * Copyright (c) Codice Foundation
 *
 * This is free software: you can redistribute it and/or modify it under the terms of the GNU Lesser General Public License as published by the Free Software Foundation, either
 * version 3 of the License, or any later version.
 *
 * This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
 * See the GNU Lesser General Public License for more details. A copy of the GNU Lesser General Public License is distributed along with this program and can be found at
 * <http://www.gnu.org/licenses/lgpl.html>.
 *
 **/
 -->"""


@dataclass(frozen=True)
class SyncConfig:
    """Names and locations used to find the manifest header and the pom node."""

    plugin_artifact_id: str = "maven-bundle-plugin"
    instructions_node: str = "instructions"
    import_property: str = "Import-Package"
    manifest_path: str = "META-INF/MANIFEST.MF"
    descriptor_file: str = "pom.xml"
    output_directory: str = "target/classes"
    license_header: str = DEFAULT_LICENSE_HEADER

    @property
    def manifest_header(self) -> str:
        # The manifest header and the pom property share a name.
        return self.import_property


def load_config(path: str | Path | None = None) -> SyncConfig:
    """Load a SyncConfig from a YAML file.

    No path (``None``) yields the defaults. An empty file does too.

    Raises:
        ConfigError: If the file does not exist, is not valid YAML, is not a mapping, or
            names keys that SyncConfig does not have.
    """
    if path is None:
        return SyncConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config from {path}: {e}") from e

    if data is None:
        return SyncConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config in {path} must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(SyncConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    for key, value in data.items():
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Config key '{key}' must be a non-empty string")

    return SyncConfig(**data)


def dump_config(config: SyncConfig) -> str:
    """Render a config as YAML, in the same shape load_config accepts."""
    return yaml.safe_dump(asdict(config), sort_keys=False, width=200)
