from .extractor import extract_qualifications, identify_zones, parse_qualification_line, qualification_weight
from .keywords import bucket_keywords, keywords_from_qualifications

__all__ = [
    "bucket_keywords",
    "extract_qualifications",
    "identify_zones",
    "keywords_from_qualifications",
    "parse_qualification_line",
    "qualification_weight",
]
