"""Application services. Every public method returns a ServiceResult."""

from wimt.services.category import CategoryService
from wimt.services.publisher import DomainEventPublisher
from wimt.services.result import ServiceError, ServiceResult
from wimt.services.session import SessionService

__all__ = [
    "CategoryService",
    "DomainEventPublisher",
    "ServiceError",
    "ServiceResult",
    "SessionService",
]
