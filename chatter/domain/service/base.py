"""Base service class for domain services."""

from chatter.domain.error import NotAuthorizedError
from chatter.domain.value import Actor, Capability


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


def require_capability(actor: Actor, capability: Capability, action: str) -> None:
    """Raise NotAuthorizedError unless the actor holds a capability."""
    if not actor.can(capability):
        raise NotAuthorizedError(action, capability.value, actor.name)
