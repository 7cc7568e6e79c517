"""Application layer: settings, orchestration services and built-in tools."""
