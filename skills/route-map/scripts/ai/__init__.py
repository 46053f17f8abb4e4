from .chain import DEFAULT_PROVIDERS, enrich_assertions
from .errors import AIError, ProviderError, ProviderNotConfiguredError

__all__ = [
    "AIError",
    "DEFAULT_PROVIDERS",
    "ProviderError",
    "ProviderNotConfiguredError",
    "enrich_assertions",
]
