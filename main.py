"""
Service entrypoint for the Smartlogic concordance transformer.

This script performs the following steps:
- loads .env and (optionally) configs/service.yaml, with env overrides
- configures logging
- builds the writer client, the stream consumer and the transformer service
- starts the consumer on a background thread
- serves the HTTP API with uvicorn until interrupted
- shuts the consumer down and closes the writer client
"""

import argparse
import logging
import threading
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from application import TransformerService, build_checks
from infrastructure.api import create_app
from infrastructure.config import load_service_config
from infrastructure.constants import SERVICE_CONFIG_FILE
from infrastructure.messaging import make_consumer
from infrastructure.observability import configure_logging
from infrastructure.writer import WriterClient

logger = logging.getLogger(__name__)

CONSUMER_JOIN_TIMEOUT_S = 30.0


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Listen for Smartlogic concept updates and forward concordances to the writer"
    )
    p.add_argument(
        "--config",
        type=str,
        default=str(SERVICE_CONFIG_FILE),
        help="Path to service.yaml (default: configs/service.yaml; skipped if missing)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file (default: .env; skipped if missing)",
    )
    p.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (overrides LOG_LEVEL)",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional rotating log file",
    )
    return p.parse_args()


def main() -> None:
    args = _parse_args()

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=False)

    config_path = Path(args.config)
    cfg = load_service_config(config_path if config_path.exists() else None)

    configure_logging(
        level=args.log_level or cfg.log_level,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    logger.info(
        "[Startup] %s is starting (WRITER_ADDRESS=%s, KAFKA_TOPIC=%s, GROUP_NAME=%s, CONSUMER_BACKEND=%s)",
        cfg.app_system_code,
        cfg.writer_address,
        cfg.topic,
        cfg.group_name,
        cfg.consumer_backend.value,
    )
    logger.info("System code: %s, App Name: %s, Port: %d", cfg.app_system_code, cfg.app_name, cfg.port)

    writer = WriterClient.from_cfg(cfg)
    consumer = make_consumer(cfg)
    service = TransformerService(writer, cfg.topic)
    app = create_app(cfg=cfg, service=service, checks=build_checks(cfg, writer, consumer))

    consumer_thread = threading.Thread(
        target=consumer.start_listening,
        args=(service.handle_concordance_event,),
        name="concordance-consumer",
        daemon=True,
    )
    consumer_thread.start()

    try:
        # Blocks until SIGINT/SIGTERM
        uvicorn.run(app, host="0.0.0.0", port=cfg.port, log_config=None)
    finally:
        logger.info("Shutting down consumer")
        consumer.shutdown()
        consumer_thread.join(timeout=CONSUMER_JOIN_TIMEOUT_S)
        writer.close()
        logger.info("Stopping application")


if __name__ == "__main__":
    main()
