"""Global pytest configuration."""

import os

# Pin engine settings for tests before any imports
os.environ.setdefault("VOYAGE_INSERT_GAP_CONNECTORS", "false")
os.environ.setdefault("VOYAGE_DEFAULT_REFERENCE_MEMBER_ID", "me")
