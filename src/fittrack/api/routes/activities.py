"""Stored activity query routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from fittrack.db.engine import get_session
from fittrack.db.repository import get_activity_path, get_recent_activities
from fittrack.models.activity import Activity, ActivityPathPoint

router = APIRouter()


@router.get("/", response_model=List[Activity])
def list_activities(
    limit: int = 20,
    user_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    """List recent activities, newest first."""
    return get_recent_activities(session, limit=limit, user_id=user_id)


@router.get("/{activity_id}", response_model=Activity)
def get_activity(activity_id: int, session: Session = Depends(get_session)):
    """Fetch a single activity by primary key."""
    activity = session.get(Activity, activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    return activity


@router.get("/{activity_id}/path", response_model=List[ActivityPathPoint])
def get_path(activity_id: int, session: Session = Depends(get_session)):
    """Recorded path of one activity, in received order."""
    if not session.get(Activity, activity_id):
        raise HTTPException(status_code=404, detail="Activity not found")
    return get_activity_path(session, activity_id)
