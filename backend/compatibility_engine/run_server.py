#!/usr/bin/env python3
"""
Run the compatibility service API server.

Usage:
    python -m backend.compatibility_engine.run_server --port 8080 --reload
"""

import argparse

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Run the compatibility service API")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (development only)")
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: info)"
    )
    args = parser.parse_args()

    uvicorn.run(
        "backend.compatibility_engine.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level
    )


if __name__ == "__main__":
    main()
