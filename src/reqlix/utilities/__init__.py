"""reqlix.utilities - Filesystem helpers."""
