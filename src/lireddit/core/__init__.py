"""Configuration, constants and security helpers."""
