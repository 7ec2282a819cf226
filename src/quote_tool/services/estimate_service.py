"""
Estimate Service - prices and stores submitted estimates.
"""
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.models import PricingEstimate
from ..engine import PricingEngine
from ..engine.pricing_engine import Selections
from ..errors import EmptyEstimateError, PersistenceError


class EstimateService:
    """Recomputes estimates server-side and persists them."""

    def __init__(self, engine: PricingEngine):
        self.engine = engine

    def submit(self, db: Session, email: str, selections: Selections) -> PricingEstimate:
        """
        Price the selections and save an estimate record.

        The total and summary always come from the engine, never from the client.

        Raises:
            EmptyEstimateError: no recognized selection carries a price
            PersistenceError: the insert failed; nothing was saved
        """
        estimate = self.engine.quote(selections)
        if estimate.total <= 0:
            logger.info(f"Rejected empty estimate from {email}")
            raise EmptyEstimateError("Total price must be positive")

        record = PricingEstimate(
            email=email,
            total_price=estimate.total,
            selections={str(k): list(v) for k, v in selections.items()},
            breakdown=estimate.summary,
        )

        try:
            db.add(record)
            db.commit()
            db.refresh(record)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save pricing estimate for {email}: {e}")
            raise PersistenceError("Failed to save estimate") from e

        logger.info(f"Pricing estimate saved: id={record.id}, email={email}, total=${record.total_price}")
        return record
