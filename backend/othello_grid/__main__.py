#!/usr/bin/env python3
"""
Othello Grid Engine - Main Entry Point
"""
import argparse
import logging
import uvicorn
from othello_grid import server
from othello_grid.config import DEFAULT_CONFIG_FILE, load_config

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str):
    """Show engine logs next to uvicorn's at the requested level"""
    logging.basicConfig(format=LOG_FORMAT, datefmt="%H:%M:%S")
    logging.getLogger("othello_grid").setLevel(level.upper())


def main(argv=None):
    parser = argparse.ArgumentParser(description="Serve the Othello grid engine over HTTP")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="JSON file with game defaults")
    parser.add_argument("--reload", action="store_true", help="Restart the server when the code changes")
    parser.add_argument("--log-level", default="info")
    args = parser.parse_args(argv)

    # A reloaded worker imports the app afresh and reads othello.json itself
    if args.reload and args.config != DEFAULT_CONFIG_FILE:
        parser.error("--config cannot be combined with --reload")

    setup_logging(args.log_level)

    print("Starting Othello Grid Engine...")
    print(f"Server will be available at: http://localhost:{args.port}")
    print(f"API documentation: http://localhost:{args.port}/docs")
    print("Press Ctrl+C to stop the server")

    if args.reload:
        uvicorn.run("othello_grid.server:app", host=args.host, port=args.port,
                    reload=True, log_level=args.log_level)
        return

    server.default_config = load_config(args.config)
    uvicorn.run(server.app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
