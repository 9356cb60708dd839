"""Production container and FastAPI integration."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from chatter.util.di import PROVIDERS, select_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Every mockable component resolves to its production implementation
    (postgres, redis, webhook). Settings come from the environment.
    """
    providers = [select_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app (request scope per HTTP request)."""
    setup_dishka(container, app)
