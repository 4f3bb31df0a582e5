from .dates import extract_dates, normalize_dates, parse_date_range, strip_dates
from .load import LoadedDocument, load_document
from .resume import parse_resume
from .segmenter import PartitionInvariantError, parse_contact, segment_document

__all__ = [
    "LoadedDocument",
    "PartitionInvariantError",
    "extract_dates",
    "load_document",
    "normalize_dates",
    "parse_contact",
    "parse_date_range",
    "parse_resume",
    "segment_document",
    "strip_dates",
]
