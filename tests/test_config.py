"""Tests for configuration loading and registry wiring."""

import pytest

from config import Config, load_config
from shortlinks.analytics import ClickSink
from shortlinks.factory import build_registry, build_store
from shortlinks.storage.memory import InMemoryMappingStore
from shortlinks.storage.postgres import PostgresMappingStore


class TestConfig:
    
    def test_defaults(self, monkeypatch):
        for name in ("STORAGE_BACKEND", "SHORT_CODE_LENGTH", "DEDUPE_URLS", "REDIS_URL"):
            monkeypatch.delenv(name, raising=False)
        
        config = Config(_env_file=None)
        
        assert config.storage_backend == "postgres"
        assert config.short_code_length == 6
        assert config.dedupe_urls is True
        assert config.redis_url is None
    
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        monkeypatch.setenv("SHORT_CODE_LENGTH", "8")
        monkeypatch.setenv("DEDUPE_URLS", "false")
        
        config = load_config(_env_file=None)
        
        assert config.storage_backend == "memory"
        assert config.short_code_length == 8
        assert config.dedupe_urls is False
    
    def test_rejects_unknown_backend(self):
        with pytest.raises(ValueError):
            Config(storage_backend="sqlite", _env_file=None)
    
    def test_rejects_short_codes_that_are_too_short(self):
        with pytest.raises(ValueError):
            Config(short_code_length=2, _env_file=None)


@pytest.mark.asyncio
class TestFactory:
    
    async def test_build_store(self):
        assert isinstance(build_store(Config(storage_backend="memory", _env_file=None)), InMemoryMappingStore)
        
        store = build_store(Config(
            storage_backend="postgres",
            database_url="postgresql://u:p@db:5432/links",
            _env_file=None,
        ))
        assert isinstance(store, PostgresMappingStore)
        assert store.host == "db"
    
    async def test_build_registry_applies_settings(self):
        config = Config(
            storage_backend="memory",
            short_code_length=8,
            dedupe_urls=False,
            enable_custom_codes=False,
            max_collision_retries=3,
            redis_url=None,
            _env_file=None,
        )
        
        registry = await build_registry(config)
        mapping, _ = await registry.create("https://example.com")
        
        assert len(mapping.short_code) == 8
        assert registry.dedupe_urls is False
        assert registry.enable_custom_codes is False
        assert registry.max_collision_retries == 3
        assert type(registry.analytics) is ClickSink
        await registry.close()
