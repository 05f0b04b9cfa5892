"""Android UI Bridge - live UI hierarchy snapshots and input over a local HTTP API."""

__version__ = "0.1.0"
