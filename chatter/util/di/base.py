"""Provider base class and mock selection."""

from typing import ClassVar, Literal, Type

from dishka import Provider

# Infrastructure components that tests can swap for in-memory versions
Component = Literal["persistence", "cache", "notifications"]


class ProviderBase(Provider):
    """Base for every provider in the container.

    A mockable component is declared as a base class naming its
    ``__mock_component__`` with exactly one production and at most one
    mock subclass, told apart by ``__is_mock__``. Providers without
    subclasses are used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False


def select_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for a base.

    Args:
        base: Provider listed in PROVIDERS
        use_mock: Prefer the mock implementation of a mockable component

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = {
        getattr(subclass, "__is_mock__", False): subclass
        for subclass in base.__subclasses__()
    }
    if not implementations:
        return base

    try:
        return implementations[use_mock]
    except KeyError:
        kind = "mock" if use_mock else "production"
        component = base.__mock_component__ or base.__name__
        raise ValueError(f"No {kind} implementation for {component}") from None
