from .normalizer import normalize_url
from .classifier import UrlClassifier, UrlRole, classify_detail, classify_listing, compile_patterns
from .dedup import VisitedSet
from .budget import PageBudget

__all__ = [
    "normalize_url",
    "UrlClassifier",
    "UrlRole",
    "classify_detail",
    "classify_listing",
    "compile_patterns",
    "VisitedSet",
    "PageBudget",
]
