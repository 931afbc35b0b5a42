"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from components import (
    ComponentFactory,
    ComponentRegistry,
    ComponentValidator,
    FactoryOptions,
    PropertyMapper,
    RegistryBuilder,
    register_builtin_components,
)
from events import EventDispatcher, QueuedEventBridge
from schema import AnvilYamlParser

from .config import Settings, get_settings
from .logging_config import configure_logging


class CoreModule(Module):
    """Core dependencies."""

    def __init__(
        self,
        dispatcher: EventDispatcher | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide settings (explicit or from environment)."""
        return self.settings if self.settings is not None else get_settings()

    @singleton
    @provider
    def provide_registry(self) -> ComponentRegistry:
        """Provide the frozen registry with every builtin registered."""
        builder = RegistryBuilder()
        register_builtin_components(builder)
        return builder.build()

    @singleton
    @provider
    def provide_dispatcher(self) -> EventDispatcher:
        """Provide the event dispatch capability handed to property mapping."""
        return self.dispatcher if self.dispatcher is not None else QueuedEventBridge()

    @singleton
    @provider
    def provide_mapper(self, dispatcher: EventDispatcher) -> PropertyMapper:
        return PropertyMapper(dispatcher)

    @singleton
    @provider
    def provide_validator(self, registry: ComponentRegistry) -> ComponentValidator:
        return ComponentValidator(registry)

    @singleton
    @provider
    def provide_factory(
        self,
        registry: ComponentRegistry,
        validator: ComponentValidator,
        mapper: PropertyMapper,
        settings: Settings,
    ) -> ComponentFactory:
        """Provide tree factory configured from settings."""
        options = FactoryOptions(
            debug=settings.debug,
            validate_components=settings.validate_components,
            max_depth=settings.max_tree_depth,
        )
        return ComponentFactory(registry, validator, mapper, options)

    @singleton
    @provider
    def provide_parser(self, validator: ComponentValidator, settings: Settings) -> AnvilYamlParser:
        return AnvilYamlParser(validator=validator, max_depth=settings.max_tree_depth)


def create_container(
    dispatcher: EventDispatcher | None = None,
    settings: Settings | None = None,
    configure: bool = True,
) -> Injector:
    """Create configured injector."""
    injector = Injector([CoreModule(dispatcher, settings)])
    if configure:
        resolved = injector.get(Settings)
        configure_logging(resolved.log_level, resolved.json_logs)
    return injector
