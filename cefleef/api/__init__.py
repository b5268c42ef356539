"""cefleef HTTP API."""
