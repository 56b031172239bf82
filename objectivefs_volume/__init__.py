"""
ObjectiveFS Volume Plugin - Docker volume driver for ObjectiveFS filesystems.

This package provides the volume registry, the reference-counted mount
coordinator, the Docker volume plugin HTTP API and a small CLI to run it.
"""

__version__ = "1.0.0"
__all__ = ["api", "cli", "driver"]
