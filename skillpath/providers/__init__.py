"""Provider families, the generation policy and the completion adapter."""

from .adapter import CompletionAdapter, build_adapter
from .base import BaseProvider, CompletionResult, ProviderId
from .policy import GenerationPolicy

__all__ = [
    "BaseProvider",
    "CompletionAdapter",
    "CompletionResult",
    "GenerationPolicy",
    "ProviderId",
    "build_adapter",
]
