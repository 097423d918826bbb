"""Domain layer - pure value types with no infrastructure dependencies.

- Document: immutable snapshot of a post or paper, identified by ``id``
- FieldWeights: static per-field weighting for fuzzy matching
- Query value objects: filters, sort specs, matches and result pages
- Errors: the failure taxonomy shared by every layer
"""

from content_discovery.domain.errors import (
    ContentDiscoveryError,
    DocumentNotFoundError,
    InvalidArgumentError,
    StoreUnavailableError,
)
from content_discovery.domain.model import SEARCH_FIELDS, Document, FieldWeights
from content_discovery.domain.search import (
    DEFAULT_SORT_DIRECTIONS,
    FuzzyMatch,
    QueryFilter,
    ResultPage,
    ScoredDocument,
    SortSpec,
    StoreFilter,
)


__all__ = [
    "DEFAULT_SORT_DIRECTIONS",
    "SEARCH_FIELDS",
    "ContentDiscoveryError",
    "Document",
    "DocumentNotFoundError",
    "FieldWeights",
    "FuzzyMatch",
    "InvalidArgumentError",
    "QueryFilter",
    "ResultPage",
    "ScoredDocument",
    "SortSpec",
    "StoreFilter",
    "StoreUnavailableError",
]
