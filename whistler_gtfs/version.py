"""Version information."""

VERSION = "0.1.0"
RULES_SCHEMA_VERSION = 1
