import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from command_center.api.deps import get_live_cache
from command_center.database import get_db
from command_center.live.cache import LiveDataCache
from command_center.models import Server, ServerStatus
from command_center.schemas import CamelModel, server_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/servers", tags=["servers"])


class ServerCreate(CamelModel):
    server_id: str = Field(min_length=1)
    name: Optional[str] = None
    region: str = Field(min_length=1)
    status: ServerStatus
    load: int = Field(default=0, ge=0, le=100)


class ServerUpdate(CamelModel):
    server_id: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = None
    region: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ServerStatus] = None
    load: Optional[int] = Field(default=None, ge=0, le=100)


@router.get("")
def list_servers(db: Session = Depends(get_db), cache: LiveDataCache = Depends(get_live_cache)):
    """
    Live servers when the refresher has populated them, stored servers otherwise.
    Writes below only touch storage, so they are not visible here while the
    live slice is populated.
    """
    live = cache.get_servers()
    if live:
        return [s.to_json() for s in live]
    servers = db.scalars(select(Server).order_by(Server.id)).all()
    return [server_to_dict(s) for s in servers]


@router.post("", status_code=201)
def create_server(payload: ServerCreate, db: Session = Depends(get_db)):
    server = Server(
        server_id=payload.server_id,
        region=payload.region,
        status=payload.status.value,
        load=payload.load,
    )
    if payload.name is not None:
        server.name = payload.name
    try:
        db.add(server)
        db.commit()
        db.refresh(server)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Server '{payload.server_id}' already exists")
    logger.info(f"Server {server.server_id} created (id={server.id})")
    return server_to_dict(server)


@router.patch("/{server_id}")
def update_server(server_id: int, payload: ServerUpdate, db: Session = Depends(get_db)):
    server = db.get(Server, server_id)
    if not server:
        raise HTTPException(status_code=404, detail="Server not found")

    updates = payload.model_dump(exclude_unset=True)
    for field, value in updates.items():
        if value is None:
            continue
        if isinstance(value, ServerStatus):
            value = value.value
        setattr(server, field, value)
    try:
        db.commit()
        db.refresh(server)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Failed to update server")
    return server_to_dict(server)


@router.delete("/{server_id}", status_code=204)
def delete_server(server_id: int, db: Session = Depends(get_db)):
    server = db.get(Server, server_id)
    if server:
        external_id = server.server_id
        db.delete(server)
        db.commit()
        logger.info(f"Server {external_id} deleted (id={server_id})")
    return Response(status_code=204)
