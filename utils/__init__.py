"""Utilities package for the Favicon Pong server"""
from .helpers import clamp, utc_timestamp
from .settings import load_settings, default_settings, GameConfig
