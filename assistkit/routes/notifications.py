"""Notification feed routes."""

from __future__ import annotations

from fastapi import APIRouter

from assistkit.models.notification import Notification
from assistkit.services.notifier import get_notifier

router = APIRouter()


@router.get("/notifications", response_model=list[Notification])
async def list_notifications() -> list[Notification]:
    """Recent notifications, oldest first."""
    return get_notifier().recent()
