"""UPM Guard: dependency-integrity tooling for Unity packages."""

__version__ = "0.1.0"
