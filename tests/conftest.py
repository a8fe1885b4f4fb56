"""Shared pytest configuration."""
import os

# keep the app's own engine off the working directory
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
