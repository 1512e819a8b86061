"""
Domain model and its join tables to Terms and TranslationRequests
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from awadiko.core.db import Base


class Domain(Base):
    __tablename__ = "domains"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)

    terms = relationship("DomainsOnTerms", back_populates="domain")
    requests = relationship("DomainsOnRequests", back_populates="domain")


class DomainsOnTerms(Base):
    __tablename__ = "domains_on_terms"

    term_id = Column(Integer, ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True)
    domain_id = Column(Integer, ForeignKey("domains.id"), primary_key=True)

    term = relationship("Term", back_populates="domains")
    domain = relationship("Domain", back_populates="terms")


class DomainsOnRequests(Base):
    __tablename__ = "domains_on_requests"

    request_id = Column(Integer, ForeignKey("translation_requests.id", ondelete="CASCADE"), primary_key=True)
    domain_id = Column(Integer, ForeignKey("domains.id"), primary_key=True)

    request = relationship("TranslationRequest", back_populates="domains")
    domain = relationship("Domain", back_populates="requests")
