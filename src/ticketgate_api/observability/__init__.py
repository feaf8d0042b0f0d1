"""In-process observability helpers."""
