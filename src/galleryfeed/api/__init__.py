"""HTTP layer for Gallery Feed."""
