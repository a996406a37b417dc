"""Configuration constants for the Favicon Pong server."""
