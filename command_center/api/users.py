"""
User management endpoints.

Passwords are accepted in request bodies, stored as bcrypt hashes and never
returned: every response goes through user_to_dict.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from command_center.database import get_db
from command_center.models import User
from command_center.schemas import CamelModel, user_to_dict
from command_center.security import hash_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserUpdate(CamelModel):
    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)


@router.get("")
def list_users(db: Session = Depends(get_db)):
    users = db.scalars(select(User).order_by(User.username)).all()
    return [user_to_dict(u) for u in users]


@router.post("", status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    user = User(username=payload.username, password_hash=hash_password(payload.password))
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"User '{payload.username}' already exists")
    logger.info(f"User {user.username} created")
    return user_to_dict(user)


@router.patch("/{user_id}")
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if payload.username is not None:
        user.username = payload.username
    if payload.password is not None:
        user.password_hash = hash_password(payload.password)
    try:
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Failed to update user")
    return user_to_dict(user)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if user:
        db.delete(user)
        db.commit()
        logger.info(f"User {user_id} deleted")
    return Response(status_code=204)
