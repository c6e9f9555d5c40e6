#!/usr/bin/env python3
"""
Main entry point for the Che URL shortener service.

Concurrency: a single uvicorn process serves requests on the event loop;
record store operations run in worker threads and are serialized by the
store's lock. The JSON file has one owner, so there is no multi-worker mode.

Usage:
    python app.py

Environment variables:
    STORE_PATH - JSON file holding the URL records (default urls.json)
    STATIC_DIR - Static asset root (default frontend/build)
    HOST - Host to bind to
    PORT - Port to listen on
    MAX_COLLISION_RETRIES - Random draws before falling back to unused pairs
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from che_shortener.service import URLShortenerService
from che_shortener.shortcode import ShortCodeGenerator
from che_shortener.store.json_file import JSONFileURLStore
from che_shortener.store.exceptions import StoreLoadError
from che_shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    logger = app.state.logger
    
    logger.info(f"Serving {app.state.store.count()} URL records from {app.state.config.store_path}")
    
    yield
    
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()
    
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    
    logger.info("Che URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")
    
    # The store must load before anything is served
    store = JSONFileURLStore(config.store_path, logger=logger)
    try:
        store.load()
    except StoreLoadError as e:
        logger.error(f"Failed to load URL records: {e}")
        sys.exit(1)
    
    generator = ShortCodeGenerator(max_attempts=config.max_collision_retries)
    service = URLShortenerService(
        store=store,
        short_code_generator=generator,
        logger=logger,
    )
    
    app = create_app(
        store_instance=store,
        service_instance=service,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
        log_config=None,
    )
    
    server = uvicorn.Server(uvicorn_config)
    
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True
    
    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)
    
    try:
        logger.info(f"Starting server on http://{config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
