#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for all application configuration,
including environment variables, defaults, and validation.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional, List, Callable, Any

from .env_loader import load_env_file
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

INTELLIGENCE_BACKENDS = ('openai', 'local')
STORAGE_BACKENDS = ('postgres', 'supabase', 'memory')
CLUSTER_STRATEGIES = ('topic', 'lexical')
MAX_SOURCE_WORKERS_LIMIT = 4


@dataclass
class IntelligenceConfig:
    """Language-analysis service configuration."""
    backend: str = 'openai'
    openai_api_key: Optional[str] = None
    model: str = 'gpt-4o'
    timeout: int = 30
    max_tokens: int = 2000
    llm_debug_log: Optional[str] = None


@dataclass
class StorageConfig:
    """Persistence backend configuration."""
    backend: str = 'postgres'
    supabase_url: Optional[str] = None
    supabase_db_password: Optional[str] = None
    supabase_service_key: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    connection_timeout: int = 30

    def postgres_dsn(self) -> str:
        """PostgreSQL connection string for the Supabase pooler."""
        if not self.supabase_url or not self.supabase_url.startswith('https://'):
            raise ConfigurationError('SUPABASE_URL', f"invalid Supabase URL format: {self.supabase_url}")

        host = self.supabase_url.replace('https://', '').rstrip('/')
        # Pooler port
        return f"postgresql://postgres:{self.supabase_db_password}@{host}:6543/postgres?sslmode=require"

    @property
    def supabase_key(self) -> Optional[str]:
        """Service key when present, anon key otherwise."""
        return self.supabase_service_key or self.supabase_anon_key


@dataclass
class ApplicationConfig:
    """Core application configuration."""
    # Feed and page retrieval
    feed_timeout: int = 10
    page_timeout: int = 15
    feed_user_agent: str = "CivicCrosscheck/1.0 (news analysis)"
    max_entries_per_source: int = 10

    # Pacing
    source_delay_seconds: float = 2.0
    article_delay_seconds: float = 1.0
    max_source_workers: int = 1

    # Analysis
    body_char_budget: int = 2000
    comparison_excerpt_chars: int = 500
    cluster_strategy: str = 'topic'
    lexical_similarity_threshold: float = 0.6

    # Scheduling
    cycle_interval_hours: float = 2.0

    # Logging
    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    """Master configuration container."""
    intelligence: IntelligenceConfig = field(default_factory=IntelligenceConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    app: ApplicationConfig = field(default_factory=ApplicationConfig)

    def has_openai(self) -> bool:
        """Check if OpenAI integration is available."""
        return bool(self.intelligence.openai_api_key)


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self, env_file_path: Optional[str] = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root, or None
                to read the process environment only
        """
        self._config: Optional[Config] = None
        if env_file_path:
            load_env_file(env_file_path)

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Raises:
            ConfigurationError: If any setting is missing or invalid
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        problems: List[str] = []

        def read(key: str, default: Any, convert: Callable[[str], Any]) -> Any:
            raw = os.getenv(key)
            if raw is None or raw.strip() == '':
                return default
            try:
                return convert(raw.strip())
            except ValueError:
                problems.append(f"{key}: expected {convert.__name__}, got {raw!r}")
                return default

        intelligence_config = IntelligenceConfig(
            backend=os.getenv('INTELLIGENCE_BACKEND', 'openai').strip().lower(),
            openai_api_key=os.getenv('OPENAI_API_KEY') or None,
            model=os.getenv('OPENAI_MODEL', 'gpt-4o'),
            timeout=read('OPENAI_TIMEOUT', 30, int),
            max_tokens=read('OPENAI_MAX_TOKENS', 2000, int),
            llm_debug_log=os.getenv('LLM_DEBUG_LOG') or None
        )

        storage_config = StorageConfig(
            backend=os.getenv('STORAGE_BACKEND', 'postgres').strip().lower(),
            supabase_url=os.getenv('SUPABASE_URL') or None,
            supabase_db_password=os.getenv('SUPABASE_DB_PASSWORD') or None,
            supabase_service_key=os.getenv('SUPABASE_SERVICE_KEY') or None,
            supabase_anon_key=os.getenv('SUPABASE_ANON_KEY') or None,
            connection_timeout=read('DB_CONNECTION_TIMEOUT', 30, int)
        )

        app_config = ApplicationConfig(
            feed_timeout=read('FEED_TIMEOUT', 10, int),
            page_timeout=read('PAGE_TIMEOUT', 15, int),
            feed_user_agent=os.getenv('FEED_USER_AGENT') or ApplicationConfig.feed_user_agent,
            max_entries_per_source=read('MAX_ENTRIES_PER_SOURCE', 10, int),
            source_delay_seconds=read('SOURCE_DELAY_SECONDS', 2.0, float),
            article_delay_seconds=read('ARTICLE_DELAY_SECONDS', 1.0, float),
            max_source_workers=read('MAX_SOURCE_WORKERS', 1, int),
            body_char_budget=read('BODY_CHAR_BUDGET', 2000, int),
            comparison_excerpt_chars=read('COMPARISON_EXCERPT_CHARS', 500, int),
            cluster_strategy=os.getenv('CLUSTER_STRATEGY', 'topic').strip().lower(),
            lexical_similarity_threshold=read('LEXICAL_SIMILARITY_THRESHOLD', 0.6, float),
            cycle_interval_hours=read('CYCLE_INTERVAL_HOURS', 2.0, float),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=os.getenv('VERBOSE_LOGGING', 'false').lower() == 'true'
        )

        config = Config(
            intelligence=intelligence_config,
            storage=storage_config,
            app=app_config
        )

        problems.extend(self.validate(config))
        if problems:
            raise ConfigurationError.from_problems(problems)

        logger.info("Configuration validation passed")
        return config

    @staticmethod
    def validate(config: Config) -> List[str]:
        """Return every problem found in the assembled configuration."""
        errors = []
        intelligence, storage, app = config.intelligence, config.storage, config.app

        if intelligence.backend not in INTELLIGENCE_BACKENDS:
            errors.append(f"INTELLIGENCE_BACKEND: must be one of {', '.join(INTELLIGENCE_BACKENDS)}")
        elif intelligence.backend == 'openai' and not intelligence.openai_api_key:
            errors.append("OPENAI_API_KEY: required when INTELLIGENCE_BACKEND=openai")

        if storage.backend not in STORAGE_BACKENDS:
            errors.append(f"STORAGE_BACKEND: must be one of {', '.join(STORAGE_BACKENDS)}")
        elif storage.backend in ('postgres', 'supabase'):
            if not storage.supabase_url:
                errors.append(f"SUPABASE_URL: required when STORAGE_BACKEND={storage.backend}")
            elif not storage.supabase_url.startswith('https://'):
                errors.append("SUPABASE_URL: must start with https://")
            if storage.backend == 'postgres' and not storage.supabase_db_password:
                errors.append("SUPABASE_DB_PASSWORD: required when STORAGE_BACKEND=postgres")
            if storage.backend == 'supabase' and not (storage.supabase_service_key or storage.supabase_anon_key):
                errors.append("SUPABASE_SERVICE_KEY: SUPABASE_SERVICE_KEY or SUPABASE_ANON_KEY required "
                              "when STORAGE_BACKEND=supabase")

        positive = {
            'OPENAI_TIMEOUT': intelligence.timeout,
            'OPENAI_MAX_TOKENS': intelligence.max_tokens,
            'DB_CONNECTION_TIMEOUT': storage.connection_timeout,
            'FEED_TIMEOUT': app.feed_timeout,
            'PAGE_TIMEOUT': app.page_timeout,
            'MAX_ENTRIES_PER_SOURCE': app.max_entries_per_source,
            'BODY_CHAR_BUDGET': app.body_char_budget,
            'COMPARISON_EXCERPT_CHARS': app.comparison_excerpt_chars,
            'CYCLE_INTERVAL_HOURS': app.cycle_interval_hours,
        }
        for key, value in positive.items():
            if value <= 0:
                errors.append(f"{key}: must be greater than 0")

        if app.source_delay_seconds < 0:
            errors.append("SOURCE_DELAY_SECONDS: must not be negative")
        if app.article_delay_seconds < 0:
            errors.append("ARTICLE_DELAY_SECONDS: must not be negative")

        if not 1 <= app.max_source_workers <= MAX_SOURCE_WORKERS_LIMIT:
            errors.append(f"MAX_SOURCE_WORKERS: must be between 1 and {MAX_SOURCE_WORKERS_LIMIT}")

        if app.cluster_strategy not in CLUSTER_STRATEGIES:
            errors.append(f"CLUSTER_STRATEGY: must be one of {', '.join(CLUSTER_STRATEGIES)}")

        if not 0 < app.lexical_similarity_threshold <= 1:
            errors.append("LEXICAL_SIMILARITY_THRESHOLD: must be between 0 and 1")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if app.log_level not in valid_log_levels:
            errors.append(f"LOG_LEVEL: must be one of {', '.join(valid_log_levels)}")

        return errors

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        numeric_level = getattr(logging, config.app.log_level)
        logging.getLogger().setLevel(numeric_level)

        if config.app.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None
