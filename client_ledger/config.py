"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class LedgerConfig(BaseSettings):
    """Client ledger service configuration"""
    
    # Snapshot storage configuration
    snapshot_dir: str = "./db/"
    snapshot_extension: str = "DAT"
    snapshot_date_format: str = "%d%m%Y"  # e.g. 25122024
    
    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8080
    api_prefix: str = "/app"
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    class Config:
        env_prefix = "LEDGER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
