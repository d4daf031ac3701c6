"""Operational entry points (database setup, migrations, seed data)."""
