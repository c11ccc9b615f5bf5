"""Manifest import extraction.

Reads ``META-INF/MANIFEST.MF`` from the build output directory and pulls the
Import-Package header out of its main section. The manifest format is the
JAR one: ``Name: value`` lines, values longer than a line are continued on
lines that start with a single space, and the main section ends at the
first blank line.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from bundlesync.config import SyncConfig
from bundlesync.errors import ManifestError

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^(?P<name>[A-Za-z0-9][A-Za-z0-9_-]*): (?P<value>.*)$")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class ManifestAttributes:
    """Main-section headers of a manifest, looked up case-insensitively."""

    def __init__(self):
        self._headers: dict[str, str] = {}

    def __setitem__(self, name: str, value: str) -> None:
        self._headers[name.lower()] = value

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._headers.get(name.lower(), default)


def parse_manifest(text: str) -> ManifestAttributes:
    """Parse the main section of a manifest.

    Raises:
        ManifestError: On a line that is neither a header nor a continuation.
    """
    attributes = ManifestAttributes()
    current_name: str | None = None
    current_value = ""

    for lineno, line in enumerate(_LINE_BREAK_RE.split(text), start=1):
        if not line:
            break
        if line.startswith(" "):
            if current_name is None:
                raise ManifestError(f"Continuation line {lineno} has no header to continue")
            current_value += line[1:]
            continue

        if current_name is not None:
            attributes[current_name] = current_value

        match = _HEADER_RE.match(line)
        if not match:
            raise ManifestError(f"Invalid manifest header on line {lineno}: {line!r}")
        current_name = match.group("name")
        current_value = match.group("value")

    if current_name is not None:
        attributes[current_name] = current_value

    return attributes


def read_manifest(path: str | Path) -> ManifestAttributes:
    """Read and parse a manifest file; any read or parse failure is fatal."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Error reading '{path.name}' at {path}: {e}") from e

    try:
        return parse_manifest(text)
    except ManifestError as e:
        raise ManifestError(f"{path}: {e}") from e


def manifest_location(output_dir: str | Path, config: SyncConfig) -> Path:
    return Path(output_dir) / config.manifest_path


def extract(output_dir: str | Path, config: SyncConfig | None = None) -> str | None:
    """Return the raw import header from the generated manifest.

    Returns ``None`` when no manifest has been generated yet, which is not
    an error: the module may have no compiled output.

    Raises:
        ManifestError: If the manifest cannot be read or parsed, or lacks
            the import header.
    """
    config = config or SyncConfig()
    path = manifest_location(output_dir, config)

    if not path.exists():
        logger.debug("No manifest at %s", path)
        return None

    attributes = read_manifest(path)
    value = attributes.get(config.manifest_header)
    if value is None:
        raise ManifestError(f"'{config.manifest_header}' header missing from {path}")
    return value
