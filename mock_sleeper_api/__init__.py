"""Mock Sleeper API server and control client for local development and tests."""
