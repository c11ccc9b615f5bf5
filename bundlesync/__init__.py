"""bundlesync: keep a bundle's pom.xml Import-Package block in step with its MANIFEST.MF."""

__version__ = "0.1.0"
