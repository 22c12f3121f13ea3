"""payloadcheck - FR-1 initial payload compliance checker."""

__version__ = "1.0.0"
