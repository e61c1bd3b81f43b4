# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before app is imported anywhere
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_TO_FILE"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-pytest-only"
