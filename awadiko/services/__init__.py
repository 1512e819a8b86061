# Business logic services

from .base import ActionService
from .concept_admin_service import ConceptAdminService
from .domain_admin_service import DomainAdminService
from .term_admin_service import TermAdminService, parse_terms_csv
from .dictionary_service import DictionaryService
from .review_service import ReviewService
from .neo_curation_service import NeoCurationService

__all__ = [
    "ActionService",
    "ConceptAdminService",
    "DomainAdminService",
    "TermAdminService",
    "parse_terms_csv",
    "DictionaryService",
    "ReviewService",
    "NeoCurationService",
]
