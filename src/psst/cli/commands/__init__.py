"""Top-level psst commands."""
