"""
Tests for configuration management
"""

import pytest

from unified_payments import config as config_module
from unified_payments.config import PaymentsConfig, get_config, reload_config


class TestPaymentsConfig:
    """Test defaults and environment overrides"""
    
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PAYMENTS_API_PORT", raising=False)
        config = PaymentsConfig()
        
        assert config.api_port == 3001
        assert config.log_format == "json"
        assert config.outcome_policy == "simulated"
        assert config.domestic_failure_rate == 0.05
        assert config.compliance_block_rate == 0.10
        assert config.policy_seed is None
        assert config.simulate_latency is False
        assert config.domestic_transfer_latency_ms == 1500
        assert config.international_transfer_latency_ms == 2500
    
    def test_environment_overrides(self, monkeypatch):
        """Test PAYMENTS_ prefixed environment variables"""
        monkeypatch.setenv("PAYMENTS_API_PORT", "8080")
        monkeypatch.setenv("PAYMENTS_OUTCOME_POLICY", "always_accept")
        monkeypatch.setenv("PAYMENTS_POLICY_SEED", "42")
        monkeypatch.setenv("PAYMENTS_SIMULATE_LATENCY", "true")
        monkeypatch.setenv("PAYMENTS_CORS_ORIGINS", '["http://localhost:3000"]')
        
        config = PaymentsConfig()
        
        assert config.api_port == 8080
        assert config.outcome_policy == "always_accept"
        assert config.policy_seed == 42
        assert config.simulate_latency is True
        assert config.cors_origins == ["http://localhost:3000"]
    
    def test_reload_config(self, monkeypatch):
        """Test that reload picks up a changed environment"""
        previous = get_config()
        monkeypatch.setenv("PAYMENTS_LOG_LEVEL", "DEBUG")
        
        try:
            reloaded = reload_config()
            assert reloaded.log_level == "DEBUG"
            assert get_config() is reloaded
        finally:
            monkeypatch.setattr(config_module, "config", previous)
