"""
Local activity store: save finished sessions and read them back.

Syncing to a remote datastore is handled elsewhere; this only writes to the
configured SQLModel database.
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Union

from sqlmodel import Session, select

from fittrack.models.activity import Activity, ActivityPathPoint, build_activity
from fittrack.tracking.models import ActivityType, LocationSample, TrackingStats

logger = logging.getLogger(__name__)


def save_activity(
    session: Session,
    stats: TrackingStats,
    path: Sequence[LocationSample],
    activity_type: Union[ActivityType, str],
    user_id: int = 1,
    recorded_at: Optional[datetime] = None,
) -> Activity:
    """
    Persist a finished session with its path and return the stored Activity.

    Args:
        session: open DB session (committed here)
        stats: final stats returned by TrackingEngine.stop()
        path: samples captured with get_tracking_data() before stopping
        activity_type: run / bike / walk
        user_id: owner of the activity
        recorded_at: defaults to now (UTC)
    """
    activity = build_activity(stats, path, activity_type, user_id=user_id, recorded_at=recorded_at)
    session.add(activity)
    session.commit()
    session.refresh(activity)
    logger.info(
        "Saved %s activity %d: %.2f km, %d path points",
        activity.activity_type,
        activity.id,
        activity.distance_km,
        len(path),
    )
    return activity


def get_recent_activities(
    session: Session,
    limit: int = 5,
    user_id: Optional[int] = None,
) -> List[Activity]:
    """Most recent activities first, optionally restricted to one user."""
    query = select(Activity)
    if user_id is not None:
        query = query.where(Activity.user_id == user_id)
    query = query.order_by(Activity.recorded_at.desc(), Activity.id.desc()).limit(limit)
    return list(session.exec(query).all())


def get_activity_path(session: Session, activity_id: int) -> List[ActivityPathPoint]:
    """Path points of one activity in recorded order (empty if none)."""
    return list(session.exec(
        select(ActivityPathPoint)
        .where(ActivityPathPoint.activity_id == activity_id)
        .order_by(ActivityPathPoint.seq)
    ).all())
