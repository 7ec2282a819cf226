"""
Shared API state: one engine per process plus dependency providers.
"""
from ..engine import PricingEngine
from ..services import ContactService, EmailNotifier, EstimateService

engine = PricingEngine()


def get_engine() -> PricingEngine:
    return engine


def get_estimate_service() -> EstimateService:
    return EstimateService(engine)


def get_contact_service() -> ContactService:
    return ContactService(EmailNotifier.from_settings())
