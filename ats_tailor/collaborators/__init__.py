from .location import GazetteerLocationNormalizer, LocationNormalizer
from .sanitizer import Sanitizer, TermMapSanitizer, sanitize_document

__all__ = [
    "GazetteerLocationNormalizer",
    "LocationNormalizer",
    "Sanitizer",
    "TermMapSanitizer",
    "sanitize_document",
]
