"""GitHub service: source-host client, event gate and webhook routes."""
