"""
Speedball Tracker main
"""
import asyncio
import sys

from loguru import logger

from app.config import get_settings
from app.logging_setup import configure_logging
from database.repository import PLAYERS, TESTS, TEST_RESULTS, get_repository


async def get_stats() -> dict:
    """Row counts per table"""
    repo = get_repository()
    counts = await asyncio.gather(
        repo.count(PLAYERS),
        repo.count(TESTS),
        repo.count(TEST_RESULTS),
    )
    return dict(zip([PLAYERS, TESTS, TEST_RESULTS], counts))


def serve(host: str, port: int, reload: bool) -> None:
    import uvicorn

    uvicorn.run(
        "app.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


def main():
    """Main entry point"""
    import argparse

    settings = get_settings()
    configure_logging(settings)

    parser = argparse.ArgumentParser(description="Speedball Tracker API")
    parser.add_argument(
        "--mode",
        choices=["serve", "stats"],
        default="serve",
        help="Run mode"
    )
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Auto-reload on code changes"
    )

    args = parser.parse_args()

    if args.mode == "serve":
        logger.info(f"Starting server on {args.host}:{args.port} ({settings.environment})")
        serve(args.host, args.port, args.reload)

    elif args.mode == "stats":
        try:
            stats = asyncio.run(get_stats())
        except Exception as e:
            logger.error(f"Stats query failed: {e}")
            sys.exit(1)

        print("\n=== Database stats ===")
        for table, count in stats.items():
            print(f"  {table}: {count}")


if __name__ == "__main__":
    main()
