"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class PaymentsConfig(BaseSettings):
    """Unified payments service configuration"""
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: List[str] = ["*"]
    server_name: str = "Unified Payments API v1.0"
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    # Outcome policy configuration
    outcome_policy: str = "simulated"  # simulated or always_accept
    domestic_failure_rate: float = 0.05
    compliance_block_rate: float = 0.10
    policy_seed: Optional[int] = None
    
    # Simulated network latency, in milliseconds
    simulate_latency: bool = False
    account_latency_ms: int = 500
    domestic_transfer_latency_ms: int = 1500
    international_transfer_latency_ms: int = 2500
    transactions_latency_ms: int = 300
    transaction_latency_ms: int = 200
    
    # Client configuration
    client_base_url: str = "http://localhost:3001"
    client_timeout: float = 10.0
    
    class Config:
        env_prefix = "PAYMENTS_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = PaymentsConfig()


def get_config() -> PaymentsConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> PaymentsConfig:
    """Reload configuration from environment"""
    global config
    config = PaymentsConfig()
    return config
