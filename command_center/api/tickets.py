from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from command_center.database import get_db
from command_center.models import Ticket
from command_center.schemas import CamelModel, ticket_to_dict

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


class TicketCreate(CamelModel):
    ticket_id: str
    subject: str
    status: str
    priority: str


class TicketUpdate(CamelModel):
    ticket_id: Optional[str] = None
    subject: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None


@router.get("")
def list_tickets(db: Session = Depends(get_db)):
    tickets = db.scalars(select(Ticket).order_by(Ticket.created_at.desc(), Ticket.id.desc())).all()
    return [ticket_to_dict(t) for t in tickets]


@router.post("", status_code=201)
def create_ticket(payload: TicketCreate, db: Session = Depends(get_db)):
    ticket = Ticket(
        ticket_id=payload.ticket_id,
        subject=payload.subject,
        status=payload.status,
        priority=payload.priority,
    )
    try:
        db.add(ticket)
        db.commit()
        db.refresh(ticket)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Ticket '{payload.ticket_id}' already exists")
    return ticket_to_dict(ticket)


@router.patch("/{ticket_id}")
def update_ticket(ticket_id: int, payload: TicketUpdate, db: Session = Depends(get_db)):
    ticket = db.get(Ticket, ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(ticket, field, value)
    try:
        db.commit()
        db.refresh(ticket)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Failed to update ticket")
    return ticket_to_dict(ticket)
