#!/usr/bin/env python3
"""
Main entry point for the Sideline Rotation web API.

This script launches the Flask-based JSON server.
"""
import argparse
import logging

from sideline_rotation.ui.web_app import run_web_app
from sideline_rotation.utils.constants import APP_TITLE, DEFAULT_HOST, DEFAULT_PORT

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=f"Run the {APP_TITLE} web API")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Address to bind to")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to listen on")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_web_app(host=args.host, port=args.port)
