#!/usr/bin/env python3
"""Logging configuration"""
import logging
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class LoggingConfig:
    """Logging configuration"""
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: str = ""
    environment: str = "development"

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if env == "development" else "INFO"),
            log_format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("LOG_FILE", ""),
            environment=env,
        )


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure root logging from a LoggingConfig.

    Meant for scripts and applications; the library modules only create
    loggers and never configure handlers themselves.
    """
    config = config or LoggingConfig.from_env()
    handlers = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=config.log_format,
        handlers=handlers,
    )
