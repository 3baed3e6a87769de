"""Packaged Alembic migration scripts for SUBRELAY."""
