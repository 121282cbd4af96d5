#!/usr/bin/env python3
"""
Main entry point for the UReduce URL shortener service.

Concurrency: requests are served concurrently on one event loop
(FastAPI + asyncpg connection pool). The pool is the only shared resource.

Usage:
    python app.py

Environment variables:
    DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME - PostgreSQL connection
    PORT - Port to listen on (default 8080)
    LOG_LEVEL - Logging level
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from ureduce.database.postgres import PostgresShortLinkStore
from ureduce.errors import StartupError
from ureduce.service import ShortLinkService
from ureduce.shortcode import ShortCodeGenerator
from ureduce.common.logging_config import setup_logging
from web_app import create_app


async def init_service(config: Config, logger) -> ShortLinkService:
    """Connect to the database and build the service.

    Raises:
        StartupError: If the database cannot be reached or the schema
            cannot be created; the caller decides how to exit
    """
    logger.info(f"Connecting to {config.dsn}")
    store = PostgresShortLinkStore.from_config(config, logger=logger)
    await store.connect()

    return ShortLinkService(
        store=store,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
        detect_collisions=config.detect_collisions,
        strict_persistence=config.strict_persistence,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    try:
        service = await init_service(config, logger)
    except StartupError as e:
        logger.critical(f"Refusing to serve: {e}")
        raise

    app.state.service = service
    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down URL shortener service...")
        await service.close()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("UReduce URL shortener")
    logger.info(f"Configuration: {config.model_dump(exclude={'db_password'})}")

    app = create_app(service_instance=None, config=config, lifespan=lifespan)
    app.state.logger = logger

    # Request lines come from LoggingMiddleware
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        lifespan="on",
        log_level=config.log_level.lower(),
        access_log=False,
    )
    server = uvicorn.Server(uvicorn_config)

    logger.info(f"Starting server on {config.host}:{config.port}")
    server.run()

    if not server.started:
        logger.error("Server did not start")
        sys.exit(1)


if __name__ == "__main__":
    main()
