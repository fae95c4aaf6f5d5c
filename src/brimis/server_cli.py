"""CLI entry point for the Brimis workflow API server."""

import argparse
import os


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="brimis-server",
        description="Brimis workflow API server (gated 11-step repair process)",
    )
    parser.add_argument("--host", default=None, help="Bind host (default: BRIMIS_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: BRIMIS_PORT or 8080)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: SQLite database, console logs",
    )
    args = parser.parse_args(argv)

    if args.local:
        os.environ["BRIMIS_LOCAL_MODE"] = "1"

    import uvicorn

    from brimis.config import settings

    uvicorn.run(
        "brimis.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
