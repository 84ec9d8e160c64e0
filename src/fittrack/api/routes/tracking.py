"""
Live tracking routes over the app's TrackingEngine.

All handlers are `async def`, so engine calls always run on the event loop
thread one at a time. Only the DB write in stop_tracking is awaited, and it
never touches the engine. The engine is not thread-safe; keep it that way
if you add routes here.
"""
import logging
from dataclasses import asdict
from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from fittrack.api.schemas import (
    SampleIn,
    SamplesAccepted,
    StatsOut,
    StopRequest,
    StopResponse,
)
from fittrack.config import get_settings
from fittrack.db.engine import get_session
from fittrack.db.repository import save_activity
from fittrack.tracking.engine import AlreadyTrackingError, TrackingEngine
from fittrack.tracking.models import ActivityType

logger = logging.getLogger(__name__)

router = APIRouter()


def get_tracking_engine(request: Request) -> TrackingEngine:
    """Dependency returning the engine owned by this app."""
    return request.app.state.tracking_engine


@router.post("/start", status_code=201)
async def start_tracking(engine: TrackingEngine = Depends(get_tracking_engine)):
    """Start a session; 409 if one is already running (it is left untouched)."""
    try:
        engine.start()
    except AlreadyTrackingError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return {"tracking": True}


@router.post("/samples", response_model=SamplesAccepted)
async def add_samples(
    body: Union[List[SampleIn], SampleIn],
    engine: TrackingEngine = Depends(get_tracking_engine),
):
    """Push one sample or a batch, in order. Ignored while idle."""
    batch = body if isinstance(body, list) else [body]
    if not engine.is_tracking:
        return SamplesAccepted(accepted=0, tracking=False)
    for item in batch:
        engine.add_sample(item.to_sample())
    return SamplesAccepted(accepted=len(batch), tracking=True)


@router.get("/stats", response_model=StatsOut)
async def current_stats(
    activity_type: ActivityType = ActivityType.RUN,
    engine: TrackingEngine = Depends(get_tracking_engine),
):
    """Live snapshot for display polling; zeroed when idle."""
    return StatsOut.from_stats(engine.get_current_stats(activity_type))


@router.get("/path", response_model=List[SampleIn])
async def current_path(engine: TrackingEngine = Depends(get_tracking_engine)):
    return [SampleIn(**asdict(sample)) for sample in engine.get_tracking_data()]


@router.post("/stop", response_model=StopResponse)
async def stop_tracking(
    body: StopRequest,
    engine: TrackingEngine = Depends(get_tracking_engine),
    session: Session = Depends(get_session),
):
    """
    Finalize the session. With save=true the activity and its path are stored.

    When saving, the session is snapshotted and persisted first and only
    stopped once the write succeeded. A failed write returns 503 and leaves
    the session running, so the client can retry or stop without saving.
    """
    if not (body.save and engine.is_tracking):
        if body.save:
            logger.info("Stop requested with save=true but no session was active; nothing saved")
        stats = engine.stop(body.activity_type)
        return StopResponse(stats=StatsOut.from_stats(stats), activity_id=None)

    stats = engine.get_current_stats(body.activity_type)
    path = engine.get_tracking_data()
    try:
        # Blocking DB write runs off the event loop; the engine is not touched there
        activity = await run_in_threadpool(
            save_activity,
            session,
            stats,
            path,
            body.activity_type,
            user_id=get_settings().user_id,
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to save activity; session left running")
        raise HTTPException(
            status_code=503,
            detail=f"Activity could not be saved, tracking continues: {exc.__class__.__name__}",
        )

    # Samples pushed while the write was in flight are dropped with the session
    engine.stop(body.activity_type)
    return StopResponse(stats=StatsOut.from_stats(stats), activity_id=activity.id)
