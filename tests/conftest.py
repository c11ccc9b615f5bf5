"""Shared builders for module layouts used across the sync tests."""

from pathlib import Path

import pytest

POM_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<!--
  Copyright (c) Example
-->
<project xmlns="http://maven.apache.org/POM/4.0.0" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd">
  <modelVersion>4.0.0</modelVersion>
  <artifactId>sample-bundle</artifactId>
  <packaging>bundle</packaging>
  <build>
    <plugins>
      <plugin>
        <groupId>org.apache.maven.plugins</groupId>
        <artifactId>maven-compiler-plugin</artifactId>
      </plugin>
      <plugin>
        <groupId>org.apache.felix</groupId>
        <artifactId>maven-bundle-plugin</artifactId>
        <configuration>
          <instructions>
            <Bundle-SymbolicName>sample-bundle</Bundle-SymbolicName>
            <Import-Package>{imports}</Import-Package>
          </instructions>
        </configuration>
      </plugin>
    </plugins>
  </build>
</project>
"""


def manifest_text(import_package: str, extra: dict[str, str] | None = None) -> str:
    """Render a manifest main section, wrapping long values at 72 chars."""
    headers = {"Manifest-Version": "1.0", "Bundle-SymbolicName": "sample-bundle"}
    headers.update(extra or {})
    headers["Import-Package"] = import_package

    lines = []
    for name, value in headers.items():
        line = f"{name}: {value}"
        lines.append(line[:72])
        rest = line[72:]
        while rest:
            lines.append(" " + rest[:71])
            rest = rest[71:]
    return "\r\n".join(lines) + "\r\n\r\n"


def write_pom(root: Path, imports: str, template: str = POM_TEMPLATE) -> Path:
    pom = root / "pom.xml"
    pom.write_text(template.replace("{imports}", imports), encoding="utf-8")
    return pom


def write_manifest(root: Path, import_package: str) -> Path:
    path = root / "target" / "classes" / "META-INF" / "MANIFEST.MF"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(manifest_text(import_package).encode("utf-8"))
    return path


class RecordingSink:
    """DiagnosticSink that keeps every message for assertions."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def levels(self) -> list[str]:
        return [level for level, _ in self.messages]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def module_root(tmp_path):
    root = tmp_path / "sample-bundle"
    root.mkdir()
    return root
