"""Database subpackage - SQLAlchemy models and session handling."""
from .database import Base, SessionLocal, create_db_engine, init_db, get_db
from .models import PricingEstimate, ContactMessage

__all__ = [
    'Base', 'SessionLocal', 'create_db_engine', 'init_db', 'get_db',
    'PricingEstimate', 'ContactMessage',
]
