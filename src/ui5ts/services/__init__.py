"""Business services for ui5ts."""

from ui5ts.services.fetcher import ApiFetcher, FetchError
from ui5ts.services.generator_service import GenerationResult, GeneratorService, prepare_tree

__all__ = [
    "ApiFetcher",
    "FetchError",
    "GenerationResult",
    "GeneratorService",
    "prepare_tree",
]
