#!/usr/bin/env python3
"""
Unified Payments Entry Point

Starts the FastAPI server with the transfer ledger seeded with demo accounts.
"""

import sys

import uvicorn

from unified_payments.api import create_app
from unified_payments.config import get_config
from unified_payments.logging_config import setup_logging


def main() -> None:
    config = get_config()
    logger = setup_logging(config.log_level, log_format=config.log_format)
    
    logger.info(f"Starting {config.server_name} on {config.api_host}:{config.api_port}")
    logger.info(f"Outcome policy: {config.outcome_policy}")
    
    try:
        uvicorn.run(create_app(), host=config.api_host, port=config.api_port)
    except KeyboardInterrupt:
        logger.info("Shutting down payments API")
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
