"""Chat bot surface: command parsing, per-player sessions and the webhook API."""
