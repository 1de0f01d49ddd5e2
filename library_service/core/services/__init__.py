from library_service.core.services.base import BaseService

__all__ = ["BaseService"]
