"""Services subpackage - persistence and notification workflows."""
from .estimate_service import EstimateService
from .contact_service import ContactService
from .notifier import EmailNotifier

__all__ = ['EstimateService', 'ContactService', 'EmailNotifier']
