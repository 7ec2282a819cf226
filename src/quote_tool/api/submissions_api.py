"""
Submissions API - FastAPI router for estimate and contact form submissions.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy.orm import Session

from ..db.database import get_db
from ..errors import EmptyEstimateError, PersistenceError
from ..services import ContactService, EstimateService
from .responses import error_response, success_response, validation_error_response
from .state import get_contact_service, get_estimate_service

router = APIRouter(prefix="/api", tags=["submissions"])


# Pydantic models for API
class EstimateCreate(BaseModel):
    """Request model for saving a pricing estimate."""
    email: EmailStr
    selections: dict[int, list[str]] = Field(default_factory=dict)


class ContactCreate(BaseModel):
    """Request model for the contact form."""
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    company: Optional[str] = Field(default=None, max_length=100)
    message: str = Field(min_length=10, max_length=2000)


# Endpoints

@router.post("/pricing-estimate", status_code=201)
def create_estimate(
    payload: EstimateCreate,
    db: Session = Depends(get_db),
    service: EstimateService = Depends(get_estimate_service),
):
    """Price the selections server-side and store the estimate."""
    try:
        record = service.submit(db, email=payload.email, selections=payload.selections)
    except EmptyEstimateError as e:
        return validation_error_response([{"loc": ("body", "selections"), "msg": str(e)}])
    except PersistenceError:
        return error_response("Failed to save estimate")

    return success_response(
        {"id": record.id, "totalPrice": record.total_price},
        "Estimate saved successfully",
        201,
    )


@router.post("/contact", status_code=201)
def create_contact(
    payload: ContactCreate,
    db: Session = Depends(get_db),
    service: ContactService = Depends(get_contact_service),
):
    """Store a contact message; email notification is best effort."""
    try:
        record = service.submit(
            db,
            name=payload.name,
            email=payload.email,
            company=payload.company,
            message=payload.message,
        )
    except PersistenceError:
        return error_response("Failed to submit contact form. Please try again later.")

    return JSONResponse(
        {
            "success": True,
            "message": "Thank you for contacting us! We'll get back to you soon.",
            "id": record.id,
        },
        status_code=201,
    )
