"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from sapp.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically. Callers
    open one request scope per unit of work; the scope owns the database
    transaction::

        container = create_container()
        async with container() as request_container:
            service = await request_container.get(LearningPathService)
            await service.delete_learning_path(path_id, user_id)
        # committed here, or rolled back if the block raised

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
