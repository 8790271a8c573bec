#!/usr/bin/env python3
"""Configuration system for the TaxCloud client

Configuration hierarchy:
- taxcloud_config: TaxCloud credentials, endpoints and transport timeout
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig, configure_logging
from .taxcloud_config import TaxCloudConfig, DEFAULT_API_URL, DEFAULT_TIC_URL

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = TaxCloudConfig.from_env()

def get_settings() -> TaxCloudConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> TaxCloudConfig:
    """Reload settings from environment"""
    global settings
    settings = TaxCloudConfig.from_env()
    return settings

__all__ = [
    # Main config
    'TaxCloudConfig',
    'get_settings',
    'reload_settings',
    'settings',
    'DEFAULT_API_URL',
    'DEFAULT_TIC_URL',
    # Logging
    'LoggingConfig',
    'configure_logging',
]
