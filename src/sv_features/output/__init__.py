"""Output containers for per-jet features."""
