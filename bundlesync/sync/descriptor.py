"""Build descriptor (pom.xml) navigation and persistence.

The descriptor is parsed with ElementTree, which drops comments. That loses
the license header on every rewrite, so ``persist`` puts it back with a
second, purely textual pass over the written file. Since the header is
always dropped on read, repeated runs never stack copies of it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from xml.etree import ElementTree

from bundlesync.config import SyncConfig
from bundlesync.errors import DescriptorError, PersistenceError

logger = logging.getLogger(__name__)

_GENERATED_PREFIX_RE = re.compile(r"ns\d+$")
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass
class BuildDescriptor:
    """A parsed build descriptor and the namespace prefixes it declared."""

    path: Path
    tree: ElementTree.ElementTree
    namespaces: list[tuple[str, str]] = field(default_factory=list)

    @property
    def root(self) -> ElementTree.Element:
        return self.tree.getroot()

    @property
    def namespace(self) -> str:
        """Namespace URI of the root element, or '' for a plain document."""
        tag = self.root.tag
        if tag.startswith("{"):
            return tag[1:].split("}", 1)[0]
        return ""

    def qualify(self, name: str) -> str:
        ns = self.namespace
        return f"{{{ns}}}{name}" if ns else name


def load_descriptor(path: str | Path) -> BuildDescriptor:
    """Parse a descriptor from disk.

    Raises:
        DescriptorError: If the file cannot be read or is not well-formed XML.
    """
    path = Path(path)
    namespaces: list[tuple[str, str]] = []
    try:
        with open(path, "rb") as f:
            parser = ElementTree.iterparse(f, events=("start-ns",))
            for _event, (prefix, uri) in parser:
                namespaces.append((prefix, uri))
            root = parser.root
    except ElementTree.ParseError as e:
        raise DescriptorError(f"Unable to parse build descriptor {path}: {e}") from e
    except OSError as e:
        raise DescriptorError(f"Unable to read build descriptor {path}: {e}") from e

    return BuildDescriptor(path=path, tree=ElementTree.ElementTree(root), namespaces=namespaces)


# ── Navigation ───────────────────────────────────────────────────────


def find_plugin(descriptor: BuildDescriptor, artifact_id: str) -> ElementTree.Element:
    """Return the first ``build/plugins/plugin`` whose artifactId matches."""
    q = descriptor.qualify
    plugins = descriptor.root.find(f"{q('build')}/{q('plugins')}")
    if plugins is not None:
        for plugin in plugins.findall(q("plugin")):
            if (plugin.findtext(q("artifactId")) or "").strip() == artifact_id:
                return plugin
    raise DescriptorError(f"Unable to find plugin '{artifact_id}' in {descriptor.path}")


def find_configuration_node(
    descriptor: BuildDescriptor, config: SyncConfig | None = None
) -> ElementTree.Element:
    """Locate the element holding the import declarations.

    Walks plugin → ``configuration`` → instructions node → import property.
    Each missing step is fatal.
    """
    config = config or SyncConfig()
    q = descriptor.qualify
    plugin = find_plugin(descriptor, config.plugin_artifact_id)

    configuration = plugin.find(q("configuration"))
    if configuration is None:
        raise DescriptorError(
            f"Unable to locate configuration for plugin '{config.plugin_artifact_id}'"
        )

    instructions = configuration.find(q(config.instructions_node))
    if instructions is None:
        raise DescriptorError(
            f"Plugin '{config.plugin_artifact_id}' has no <{config.instructions_node}> "
            "in its configuration"
        )

    node = instructions.find(q(config.import_property))
    if node is None:
        raise DescriptorError(
            f"<{config.instructions_node}> of plugin '{config.plugin_artifact_id}' "
            f"has no <{config.import_property}>"
        )
    return node


# ── Persistence ──────────────────────────────────────────────────────


def persist(descriptor: BuildDescriptor, config: SyncConfig | None = None) -> None:
    """Write the descriptor back to its file and re-insert the license header.

    Raises:
        PersistenceError: If either the XML write or the header pass fails.
            No recovery is attempted; the file may be left half-written.
    """
    config = config or SyncConfig()
    _register_namespaces(descriptor.namespaces)

    try:
        with open(descriptor.path, "wb") as f:
            f.write(XML_DECLARATION.encode("utf-8"))
            descriptor.tree.write(f, encoding="UTF-8", xml_declaration=False)
    except OSError as e:
        raise PersistenceError(f"Error saving build descriptor {descriptor.path}: {e}") from e

    try:
        insert_license_header(descriptor.path, config.license_header)
    except OSError as e:
        raise PersistenceError(
            f"Error restoring license header in {descriptor.path}: {e}"
        ) from e

    logger.debug("Wrote %s", descriptor.path)


def insert_license_header(path: str | Path, header: str) -> None:
    """Append ``header`` to the first line of the file at ``path``."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        content = f.read()

    first, _, rest = content.partition("\n")
    patched = f"{first}\n{header}\n{rest}"
    if not patched.endswith("\n"):
        patched += "\n"

    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(patched)


def _register_namespaces(namespaces: list[tuple[str, str]]) -> None:
    # ElementTree keeps one global prefix map; generated ns0-style prefixes
    # cannot be registered and are left to the serializer.
    for prefix, uri in namespaces:
        if _GENERATED_PREFIX_RE.match(prefix):
            continue
        ElementTree.register_namespace(prefix, uri)
