"""
User interface package for the Sideline Rotation engine.

This package contains the Flask JSON API.
"""
from .web_app import create_app, run_web_app, WebAppState

__all__ = ["create_app", "run_web_app", "WebAppState"]
