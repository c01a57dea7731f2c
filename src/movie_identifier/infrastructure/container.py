"""Dependency injection container."""

import inspect
import logging
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, Optional, Type, TypeVar

from ..config import Config, ConfigManager
from ..core.interfaces import (
    IArtifactCache,
    ICandidateResolver,
    IFileScanner,
    ILibraryListener,
    ILookupClient,
    IMovieStore,
    IPreferenceStore,
    IProgressCallback,
    IReconciliationEngine,
)
from ..core.models import FileDescriptor

T = TypeVar("T")


class Container:
    """Dependency injection container using registry pattern."""

    def __init__(self, config_manager: Optional[ConfigManager] = None) -> None:
        """Initialize container.

        Args:
            config_manager: Configuration manager instance. If None, creates default.
        """
        self._services: Dict[Type, Any] = {}
        self._factories: Dict[Type, Callable[[], Any]] = {}
        self._singletons: Dict[Type, Any] = {}
        self._config_manager = config_manager or ConfigManager()
        self._logger = logging.getLogger(__name__)

    def register_singleton(self, interface: Type[T], implementation: Type[Any]) -> None:
        """Register a singleton service.

        Args:
            interface: Interface type.
            implementation: Implementation type.
        """
        self._services[interface] = implementation
        self._logger.debug(
            f"Registered singleton: {interface.__name__} -> {implementation.__name__}"
        )

    def register_factory(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """Register a factory function.

        Args:
            interface: Interface type.
            factory: Factory function that creates instances.
        """
        self._factories[interface] = factory
        self._logger.debug(f"Registered factory: {interface.__name__}")

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """Register a specific instance.

        Args:
            interface: Interface type.
            instance: Pre-created instance.
        """
        self._singletons[interface] = instance
        self._logger.debug(f"Registered instance: {interface.__name__}")

    def get(self, interface: Type[T]) -> T:
        """Get service instance.

        Args:
            interface: Interface type to resolve.

        Returns:
            Service instance.

        Raises:
            ValueError: If service is not registered.
        """
        if interface in self._singletons:
            return self._singletons[interface]  # type: ignore

        if interface in self._factories:
            return self._factories[interface]()  # type: ignore

        if interface in self._services:
            implementation = self._services[interface]
            instance = self._create_instance(implementation)
            self._singletons[interface] = instance
            return instance  # type: ignore

        raise ValueError(f"Service not registered: {interface.__name__}")

    def is_registered(self, interface: Type) -> bool:
        return (
            interface in self._services
            or interface in self._factories
            or interface in self._singletons
        )

    def _create_instance(self, implementation: Type[T]) -> T:
        """Create instance with dependencies resolved from constructor annotations.

        Args:
            implementation: Implementation class to instantiate.

        Returns:
            Created instance with dependencies injected.
        """
        sig = inspect.signature(implementation.__init__)
        kwargs = {}

        for param_name, param in sig.parameters.items():
            if param_name == "self":
                continue

            if param.annotation == Config:
                kwargs[param_name] = self.get_config()
            elif self.is_registered(param.annotation):
                kwargs[param_name] = self.get(param.annotation)
            elif param.default is not inspect.Parameter.empty:
                continue
            else:
                self._logger.warning(
                    f"Cannot resolve dependency: {param_name} of type {param.annotation}"
                )

        return implementation(**kwargs)

    @lru_cache(maxsize=1)
    def get_config(self) -> Config:
        """Get configuration instance.

        Returns:
            Configuration instance.
        """
        return self._config_manager.get_config()

    def configure_default_services(self) -> None:
        """Configure default service registrations."""
        from ..core.services import (
            CandidateResolver,
            ConfigPreferenceStore,
            FileArtifactCache,
            FileScanner,
            LibraryEvents,
            ReconciliationEngine,
            TMDbLookupClient,
        )
        from ..storage import SQLiteMovieStore

        self.register_singleton(ILookupClient, TMDbLookupClient)  # type: ignore
        self.register_singleton(IMovieStore, SQLiteMovieStore)  # type: ignore
        self.register_singleton(IArtifactCache, FileArtifactCache)  # type: ignore
        self.register_singleton(IPreferenceStore, ConfigPreferenceStore)  # type: ignore
        self.register_singleton(IFileScanner, FileScanner)  # type: ignore
        self.register_singleton(ICandidateResolver, CandidateResolver)  # type: ignore
        self.register_singleton(IReconciliationEngine, ReconciliationEngine)  # type: ignore
        self.register_instance(ILibraryListener, LibraryEvents())  # type: ignore

        self._logger.info("Default services configured")

    def create_identification(
        self,
        descriptors: Iterable[FileDescriptor],
        callback: Optional[IProgressCallback] = None,
    ) -> Any:
        """Create a batch identification driver wired to the registered services.

        Args:
            descriptors: Files to identify.
            callback: Optional progress callback.

        Returns:
            A new ``MovieIdentification`` in the IDLE state.
        """
        from ..core.services import MovieIdentification

        return MovieIdentification(
            descriptors,
            resolver=self.get(ICandidateResolver),  # type: ignore
            engine=self.get(IReconciliationEngine),  # type: ignore
            preference_store=self.get(IPreferenceStore),  # type: ignore
            callback=callback,
        )

    async def aclose(self) -> None:
        """Close services holding network sessions or database connections."""
        for interface in (ILookupClient, IArtifactCache, IMovieStore):
            service = self._singletons.get(interface)
            if service is None or not hasattr(service, "close"):
                continue
            result = service.close()
            if inspect.isawaitable(result):
                await result

    def reset(self) -> None:
        """Reset container state."""
        self._services.clear()
        self._factories.clear()
        self._singletons.clear()
        self.get_config.cache_clear()
        self._logger.debug("Container reset")

    def __enter__(self) -> "Container":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        pass
