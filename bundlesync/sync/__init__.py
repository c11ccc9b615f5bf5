"""Import synchronization between a bundle's manifest and its build descriptor.

This package provides the primitives for:
- Normalization: turning an Import-Package header into a comparable list
- Extraction: reading the header out of the generated MANIFEST.MF
- Navigation and persistence: finding and rewriting the pom.xml node
- Reconciliation: deciding whether the descriptor needs rewriting at all
"""
