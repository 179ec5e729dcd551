from typing import Type, TypeVar

from dependency_injector import containers, providers  # type: ignore

from notefilter.config.settings import FilterSettings
from notefilter.filters.register_filters import create_filter_registry
from notefilter.services.filter_config.filter_config_service import FilterConfigService
from notefilter.services.filter_config.interface.repository import IFilterConfigRepository
from notefilter.utils.logger import create_logger

T = TypeVar("T", bound="FilterEngineContainer")


class FilterEngineContainer(containers.DeclarativeContainer):
    """Process-scoped providers for the filter engine."""

    settings = providers.Singleton(FilterSettings.from_env)

    logger = providers.Singleton(create_logger, "notefilter", level=settings.provided.log_level)

    # Registry with the built-in filter types registered
    filter_registry = providers.Singleton(create_filter_registry, logger=logger)

    # Supplied by the host application, e.g. container.filter_config_repository.override(...)
    filter_config_repository = providers.Dependency(instance_of=IFilterConfigRepository)

    filter_config_service = providers.Singleton(
        FilterConfigService,
        registry=filter_registry,
        repository=filter_config_repository,
        settings=settings,
        logger=logger,
    )

    @classmethod
    def init(cls: Type[T], repository: IFilterConfigRepository) -> T:
        """Initialize the container with the host application's repository."""
        container = cls()
        container.filter_config_repository.override(providers.Object(repository))
        container.logger().info(f"🚀 Initializing {cls.__name__}")
        return container
