"""Networking module for Favicon Pong: wire protocol and headless client."""
