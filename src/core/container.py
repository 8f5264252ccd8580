#!/usr/bin/env python3
"""
Dependency Injection Container

Builds the configured services once and hands them to the CLI commands.
Tests register instances to replace any service before it is resolved.
"""

import logging
import threading
from functools import wraps
from typing import Any, Dict, Callable, TypeVar, Optional

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:
    """Named service registry with singleton and factory lifetimes."""

    def __init__(self):
        self._factories: Dict[str, Callable[['Container'], Any]] = {}
        self._singletons: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register_singleton(self, service_name: str, factory: Callable[['Container'], T]) -> None:
        """
        Register a service created once on first use.

        Args:
            service_name: Unique name for the service
            factory: Callable receiving the container and returning the instance
        """
        with self._lock:
            self._factories[service_name] = singleton(factory)
            self._singletons.pop(service_name, None)

    def register_factory(self, service_name: str, factory: Callable[['Container'], T]) -> None:
        """Register a service created anew on every get()."""
        with self._lock:
            self._factories[service_name] = factory
            self._singletons.pop(service_name, None)

    def register_instance(self, service_name: str, instance: T) -> None:
        """Register an existing instance as singleton."""
        with self._lock:
            self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        if service_name in self._singletons:
            return self._singletons[service_name]

        if service_name not in self._factories:
            raise KeyError(f"Service '{service_name}' not registered")

        # Reentrant: factories resolve their own dependencies through get()
        with self._lock:
            factory = self._factories[service_name]
            if getattr(factory, '_is_singleton', False):
                if service_name not in self._singletons:
                    self._singletons[service_name] = factory(self)
                    logger.debug(f"Created singleton instance for '{service_name}'")
                return self._singletons[service_name]

            logger.debug(f"Created new instance for '{service_name}'")
            return factory(self)

    def has(self, service_name: str) -> bool:
        return service_name in self._factories or service_name in self._singletons

    def clear(self) -> None:
        with self._lock:
            self._factories.clear()
            self._singletons.clear()

    def reset_singleton(self, service_name: str) -> None:
        """Drop a singleton instance so the next get() rebuilds it."""
        with self._lock:
            if self._singletons.pop(service_name, None) is not None:
                logger.debug(f"Reset singleton '{service_name}'")


def singleton(factory_func: Callable[[Container], T]) -> Callable[[Container], T]:
    """Mark a factory function as singleton."""
    if getattr(factory_func, '_is_singleton', False):
        return factory_func

    @wraps(factory_func)
    def wrapper(container: Container) -> T:
        return factory_func(container)

    wrapper._is_singleton = True
    return wrapper


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                container = Container()
                register_default_services(container)
                _container = container
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None


def _create_config(container: Container):
    from core.config import get_config_manager
    manager = get_config_manager()
    config = manager.get_config()
    manager.update_logging()
    return config


def _create_llm_logger(container: Container):
    from core.llm_logger import get_llm_logger
    return get_llm_logger(container.get('config').intelligence.llm_debug_log)


def _create_source_registry(container: Container):
    from core.sources.registry import SourceRegistry
    return SourceRegistry()


def _create_intelligence_service(container: Container):
    from core.analysis.intelligence import create_intelligence_service
    return create_intelligence_service(container.get('config'), llm_logger=container.get('llm_logger'))


def _create_persistence(container: Container):
    from core.database.persistence import PersistenceAdapter, create_store
    return PersistenceAdapter(create_store(container.get('config')))


def _create_orchestrator(container: Container, dry_run: bool = False):
    from core.pipeline import build_orchestrator
    return build_orchestrator(
        container.get('config'),
        dry_run=dry_run,
        intelligence=container.get('intelligence_service'),
        persistence=None if dry_run else container.get('persistence'),
        registry=container.get('source_registry'),
    )


def register_default_services(container: Container) -> None:
    """Register the production services, each built from configuration."""
    container.register_singleton('config', _create_config)
    container.register_singleton('llm_logger', _create_llm_logger)
    container.register_singleton('source_registry', _create_source_registry)
    container.register_singleton('intelligence_service', _create_intelligence_service)
    container.register_singleton('persistence', _create_persistence)
    container.register_singleton('orchestrator', _create_orchestrator)

    # Fresh memory store per dry run
    container.register_factory('dry_run_orchestrator', lambda c: _create_orchestrator(c, dry_run=True))

    logger.debug("Default services registered in container")


# Convenience functions for common usage patterns

def get_config():
    """Get configuration instance from container."""
    return get_container().get('config')


def get_source_registry():
    return get_container().get('source_registry')


def get_intelligence_service():
    return get_container().get('intelligence_service')


def get_persistence():
    return get_container().get('persistence')


def get_orchestrator(dry_run: bool = False):
    """Get the orchestrator; a dry run gets a fresh one backed by memory."""
    if dry_run:
        return get_container().get('dry_run_orchestrator')
    return get_container().get('orchestrator')
