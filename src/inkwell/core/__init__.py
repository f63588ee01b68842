"""Core configuration and error definitions."""
