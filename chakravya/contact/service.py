from sqlalchemy import select, desc
from sqlalchemy.orm import Session
from chakravya.contact.models import ContactSubmission
from chakravya.contact.schemas import ContactCreate


def create_submission(db: Session, payload: ContactCreate) -> ContactSubmission:
    sub = ContactSubmission(
        name=payload.name.strip(),
        email=str(payload.email),
        message=payload.message.strip(),
        status="unread",
    )
    db.add(sub)
    db.commit()
    db.refresh(sub)
    return sub


def list_submissions(db: Session) -> list[ContactSubmission]:
    return list(db.scalars(select(ContactSubmission).order_by(desc(ContactSubmission.created_at))).all())


def set_submission_status(db: Session, submission_id: str, status: str) -> ContactSubmission | None:
    sub = db.get(ContactSubmission, submission_id)
    if not sub:
        return None
    sub.status = status
    db.commit()
    db.refresh(sub)
    return sub
