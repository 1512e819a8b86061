"""
ORM models for the dictionary backend.

Importing this package registers every table on ``awadiko.core.db.Base``.
"""

from .user import User, UserProfile, ProfileTargetLanguage
from .language import Language, PartOfSpeech
from .concept import Concept
from .domain import Domain, DomainsOnTerms, DomainsOnRequests
from .term import Term
from .translation_request import TranslationRequest, RequestStatus
from .neo import Neo, NeoRating, NeoType
from .audit_log import AuditLog

__all__ = [
    "User",
    "UserProfile",
    "ProfileTargetLanguage",
    "Language",
    "PartOfSpeech",
    "Concept",
    "Domain",
    "DomainsOnTerms",
    "DomainsOnRequests",
    "Term",
    "TranslationRequest",
    "RequestStatus",
    "Neo",
    "NeoRating",
    "NeoType",
    "AuditLog",
]
