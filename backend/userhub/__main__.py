"""
Command-line entry point: `python -m userhub`.

Reads host and port from the environment (HOST, PORT; default port 3000)
and serves `userhub.main:app` with uvicorn. Flags override the environment.
"""

import argparse

import uvicorn

from userhub.config import settings


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the UserHub API server")
    parser.add_argument("--host", default=settings.host, help="Interface to bind (env HOST)")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on (env PORT)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    uvicorn.run(
        "userhub.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
