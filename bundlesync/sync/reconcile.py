"""Reconciliation: decide whether the descriptor's imports have drifted.

The comparison is order-insensitive, so reordering alone never rewrites the
pom. When the sets do differ, the node is overwritten in manifest order:
the descriptor's prior ordering is not kept.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from xml.etree import ElementTree

from bundlesync.config import SyncConfig
from bundlesync.errors import SyncError
from bundlesync.sync.descriptor import find_configuration_node, load_descriptor, persist
from bundlesync.sync.imports import ImportList, normalize
from bundlesync.sync.manifest import extract
from bundlesync.utils.logging import DiagnosticSink, LoggingSink


class SyncOutcome(Enum):
    SKIPPED = "skipped"  # No manifest, or no imports declared in it
    UNCHANGED = "unchanged"  # Descriptor already declares the manifest's imports
    CHANGED = "changed"  # Descriptor node was rewritten (in memory at least)


@dataclass
class ModuleContext:
    """Where one module's build output and descriptor live."""

    module_root: Path
    output_directory: Path
    descriptor_path: Path

    @classmethod
    def from_module_root(
        cls,
        module_root: str | Path,
        config: SyncConfig | None = None,
        output_directory: str | Path | None = None,
    ) -> ModuleContext:
        config = config or SyncConfig()
        root = Path(module_root)
        output = Path(output_directory) if output_directory else root / config.output_directory
        return cls(
            module_root=root,
            output_directory=output,
            descriptor_path=root / config.descriptor_file,
        )


@dataclass
class SyncReport:
    """What one invocation found and did."""

    outcome: SyncOutcome
    manifest_imports: ImportList = field(default_factory=ImportList)
    descriptor_imports: ImportList = field(default_factory=ImportList)
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    written: bool = False

    @property
    def changed(self) -> bool:
        return self.outcome == SyncOutcome.CHANGED

    def summary(self) -> str:
        if self.outcome == SyncOutcome.SKIPPED:
            return "no manifest imports found, nothing to synchronize"
        if self.outcome == SyncOutcome.UNCHANGED:
            return f"{len(self.manifest_imports)} package imports already in sync"
        verb = "updated" if self.written else "out of date"
        return f"Import-Package {verb}: +{len(self.added)} -{len(self.removed)}"


def reconcile(manifest_imports: ImportList, node: ElementTree.Element) -> SyncOutcome:
    """Bring ``node`` in line with ``manifest_imports`` if their sets differ."""
    current = normalize(node.text)
    if current.same_imports(manifest_imports):
        return SyncOutcome.UNCHANGED

    node.text = manifest_imports.joined()
    return SyncOutcome.CHANGED


class ImportSynchronizer:
    """Runs one read-decide-write cycle for a module."""

    def __init__(self, config: SyncConfig | None = None, sink: DiagnosticSink | None = None):
        self.config = config or SyncConfig()
        self.sink = sink or LoggingSink()

    def run(
        self,
        context: ModuleContext,
        *,
        dry_run: bool = False,
        force: bool = False,
    ) -> SyncReport:
        """Synchronize the descriptor at ``context`` with its manifest.

        Args:
            context: Paths for the module being built.
            dry_run: Decide and report, but never write the descriptor.
            force: Persist even when the imports already match.

        Raises:
            SyncError: On any malformed input or write failure, after
                reporting it to the sink.
        """
        try:
            return self._run(context, dry_run=dry_run, force=force)
        except SyncError as e:
            self.sink.error(str(e))
            raise

    def _run(self, context: ModuleContext, *, dry_run: bool, force: bool) -> SyncReport:
        raw = extract(context.output_directory, self.config)
        if raw is None:
            self.sink.info(
                f"No '{Path(self.config.manifest_path).name}' was found in build output, skipping"
            )
            return SyncReport(outcome=SyncOutcome.SKIPPED)

        manifest_imports = normalize(raw)
        if not manifest_imports:
            self.sink.info(
                f"'{self.config.manifest_header}' in the manifest is empty, skipping"
            )
            return SyncReport(outcome=SyncOutcome.SKIPPED)

        descriptor = load_descriptor(context.descriptor_path)
        node = find_configuration_node(descriptor, self.config)
        descriptor_imports = normalize(node.text)

        outcome = reconcile(manifest_imports, node)
        added, removed = manifest_imports.difference(descriptor_imports)
        report = SyncReport(
            outcome=outcome,
            manifest_imports=manifest_imports,
            descriptor_imports=descriptor_imports,
            added=added,
            removed=removed,
        )

        if outcome == SyncOutcome.UNCHANGED and not force:
            self.sink.info(
                f"Package imports between {context.descriptor_path.name} and the manifest match, skipping"
            )
            return report

        if dry_run:
            if report.changed:
                self.sink.warning(
                    f"{context.descriptor_path} is out of date with the manifest "
                    f"(+{len(added)} -{len(removed)})"
                )
            return report

        persist(descriptor, self.config)
        report.written = True
        self.sink.info(f"Updated {self.config.import_property} in {context.descriptor_path}")
        return report
