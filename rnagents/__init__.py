"""RN Agents framework tooling."""

__version__ = "1.0.0"
