"""
Command-line entry point: python -m snippetbox [--addr :4000] [--dsn URL]

Flags override the matching environment settings (HOST/PORT and
DATABASE_URL). They are applied before snippetbox.main is imported, because
the database engine is created from the settings at import time.
"""

import argparse

import uvicorn

from snippetbox.config import parse_addr, settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Snippetbox web server")
    parser.add_argument(
        "--addr",
        default=f"{settings.host}:{settings.port}",
        help="HTTP network address, e.g. :4000 or 127.0.0.1:4000",
    )
    parser.add_argument(
        "--dsn",
        default=settings.database_url,
        help="Database connection URL (SQLAlchemy async form)",
    )
    args = parser.parse_args()

    try:
        settings.host, settings.port = parse_addr(args.addr)
    except ValueError as e:
        parser.error(str(e))
    settings.database_url = args.dsn

    from snippetbox.main import app

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
