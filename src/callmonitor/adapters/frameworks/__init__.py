"""Framework helpers for building request contexts."""
