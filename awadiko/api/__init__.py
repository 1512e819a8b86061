# API endpoints and routers

from .auth_endpoints import router as auth_router
from .admin_concepts_endpoints import router as admin_concepts_router
from .admin_domains_endpoints import router as admin_domains_router
from .admin_terms_endpoints import router as admin_terms_router
from .dictionary_endpoints import router as dictionary_router
from .review_endpoints import router as review_router
from .neo_endpoints import router as neo_router
from .language_endpoints import router as language_router

__all__ = [
    "auth_router",
    "admin_concepts_router",
    "admin_domains_router",
    "admin_terms_router",
    "dictionary_router",
    "review_router",
    "neo_router",
    "language_router",
]
