"""Core modules for taskboard."""
