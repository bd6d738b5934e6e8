"""Internal helpers for recordshape (not part of the public API)."""
