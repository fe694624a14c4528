"""Core pipeline: rules model, scanners, orchestration and rendering."""
