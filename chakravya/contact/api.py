import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chakravya.shared.db import get_db
from chakravya.shared.auth import require_admin
from chakravya.shared.errors import NotFound
from chakravya.contact.schemas import ContactCreate, ContactOut, ContactStatusUpdate
from chakravya.contact.service import create_submission, list_submissions, set_submission_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["Contact"])


@router.post("", response_model=ContactOut)
def api_contact(inb: ContactCreate, db: Session = Depends(get_db)):
    sub = create_submission(db, inb)
    logger.info("contact submission %s received", sub.id)
    return sub


@router.get("", response_model=List[ContactOut], dependencies=[Depends(require_admin)])
def api_contact_list(db: Session = Depends(get_db)):
    return list_submissions(db)


@router.patch("/{submission_id}", response_model=ContactOut, dependencies=[Depends(require_admin)])
def api_contact_status(submission_id: str, inb: ContactStatusUpdate, db: Session = Depends(get_db)):
    sub = set_submission_status(db, submission_id, inb.status)
    if not sub:
        raise NotFound("Submission not found")
    return sub
