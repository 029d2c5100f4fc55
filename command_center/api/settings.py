from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from command_center.database import get_db
from command_center.models import Settings
from command_center.schemas import CamelModel, settings_to_dict

router = APIRouter(prefix="/api/settings", tags=["settings"])


class SettingsUpdate(CamelModel):
    maintenance_mode: Optional[bool] = None
    alert_email: Optional[str] = None
    theme: Optional[str] = None
    notifications: Optional[str] = None


def _get_or_create_settings(db: Session) -> Settings:
    settings = db.scalars(select(Settings).order_by(Settings.id).limit(1)).first()
    if settings is None:
        settings = Settings()
        db.add(settings)
        db.commit()
        db.refresh(settings)
    return settings


@router.get("")
def get_settings(db: Session = Depends(get_db)):
    return settings_to_dict(_get_or_create_settings(db))


@router.patch("")
def update_settings(payload: SettingsUpdate, db: Session = Depends(get_db)):
    settings = _get_or_create_settings(db)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(settings, field, value)
    db.commit()
    db.refresh(settings)
    return settings_to_dict(settings)
