"""Release build orchestration: filter targets, build, sign, write manifests."""

__version__ = "0.1.0"
