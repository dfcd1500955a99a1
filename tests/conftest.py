# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from tempfile import mkdtemp

# Settings are read at import time, so this must happen before app is imported anywhere
os.environ["ENVIRONMENT"] = "test"
os.environ["STORAGE_PROVIDER"] = "local"
os.environ["UPLOADS_DIR"] = mkdtemp(prefix="blog-uploads-")
os.environ["LOG_TO_FILE"] = "false"
