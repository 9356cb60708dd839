"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""


class ProviderError(AdapterError):
    """An external endpoint (notification webhook, edge cache) failed.

    Attributes:
        provider: Which collaborator failed, e.g. "webhook" or "edge"
    """

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")
