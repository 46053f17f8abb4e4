from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from utils import progress

from .providers import enrich_claude, enrich_huggingface, enrich_openai

Provider = Callable[[str], List[str]]

DEFAULT_PROVIDERS: Tuple[Tuple[str, Provider], ...] = (
    ("claude", enrich_claude),
    ("openai", enrich_openai),
    ("huggingface", enrich_huggingface),
)


def enrich_assertions(
    source: str,
    providers: Sequence[Tuple[str, Provider]] = DEFAULT_PROVIDERS,
    warnings: Optional[List[str]] = None,
) -> List[str]:
    """Assertion lines from the first provider that answers; ``[]`` when none does.

    A provider that answers with no lines still ends the chain. Any exception
    a provider raises becomes a warning and the next provider is tried.
    """
    for index, (name, provider) in enumerate(providers):
        if index:
            progress(f"Falling back to {name} for {source}")
        try:
            return provider(source)
        except Exception as exc:
            if warnings is not None:
                warnings.append(f"{name} enrichment failed for {source}: {exc}")
    return []
