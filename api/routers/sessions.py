from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from typing import List, Optional

from core.config import settings
from models.exercise import (
    ExerciseType,
    Landmark,
    PipelineManager,
    Pose,
    SessionLimitError,
    SessionNotFoundError,
)
from utils.serialization import CustomJSONResponse

router = APIRouter()

manager = PipelineManager(
    max_sessions=settings.MAX_ACTIVE_SESSIONS,
    max_feedback_items=settings.MAX_FEEDBACK_ITEMS,
    include_joint_angles=settings.INCLUDE_JOINT_ANGLES,
    max_stored_workouts=settings.MAX_STORED_WORKOUTS,
)

def get_manager() -> PipelineManager:
    return manager

class LandmarkPayload(BaseModel):
    name: str
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)
    confidence: float = Field(1.0, ge=0.0, le=1.0)

class PosePayload(BaseModel):
    timestamp: float = 0.0
    landmarks: List[LandmarkPayload] = []

    def to_pose(self) -> Pose:
        return Pose(
            landmarks=tuple(Landmark(lm.name, lm.x, lm.y, lm.confidence) for lm in self.landmarks),
            timestamp=self.timestamp,
        )

class ExerciseSelection(BaseModel):
    exercise_type: ExerciseType

def _get_pipeline(manager: PipelineManager, session_id: str):
    try:
        return manager.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

@router.post("/sessions", status_code=201)
async def start_session(request: ExerciseSelection, manager: PipelineManager = Depends(get_manager)):
    """Start an analysis session for the selected exercise."""
    try:
        pipeline = manager.start(request.exercise_type)
    except SessionLimitError as e:
        raise HTTPException(status_code=429, detail=str(e))

    return {
        "session_id": pipeline.session_id,
        "exercise_type": pipeline.exercise_type.value,
    }

@router.post("/sessions/{session_id}/frames")
async def analyze_frame(
    session_id: str,
    pose: PosePayload,
    include_angles: Optional[bool] = Query(None, description="Include joint angles in the response"),
    manager: PipelineManager = Depends(get_manager),
):
    """
    Analyze a single pose frame.
    Returns form score, feedback, position flag and repetition count.
    """
    pipeline = _get_pipeline(manager, session_id)
    try:
        response = pipeline.process_pose(pose.to_pose(), include_angles=include_angles)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return CustomJSONResponse(content=response)

@router.put("/sessions/{session_id}/exercise")
async def select_exercise(session_id: str, request: ExerciseSelection,
                          manager: PipelineManager = Depends(get_manager)):
    """Switch the exercise for a session. Counters start again from zero."""
    pipeline = _get_pipeline(manager, session_id)
    pipeline.select_exercise(request.exercise_type)
    return CustomJSONResponse(content=pipeline.summary())

@router.post("/sessions/{session_id}/reset")
async def reset_session(session_id: str, manager: PipelineManager = Depends(get_manager)):
    """Reset repetition count and feedback for a session."""
    pipeline = _get_pipeline(manager, session_id)
    pipeline.reset()
    return CustomJSONResponse(content=pipeline.summary())

@router.get("/sessions/{session_id}")
async def get_session(session_id: str, manager: PipelineManager = Depends(get_manager)):
    """Get the live summary of an active session."""
    pipeline = _get_pipeline(manager, session_id)
    return CustomJSONResponse(content=pipeline.summary())

@router.post("/sessions/{session_id}/end")
async def end_session(session_id: str, manager: PipelineManager = Depends(get_manager)):
    """Finish a session and move its record into the workout history."""
    try:
        session = manager.end(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

    return CustomJSONResponse(content=session.to_dict())

@router.get("/workouts")
async def list_workouts(manager: PipelineManager = Depends(get_manager)):
    """Get completed sessions, newest first."""
    return CustomJSONResponse(content={"workouts": manager.history.list_sessions()})

@router.get("/analytics/workouts")
async def workout_analytics(manager: PipelineManager = Depends(get_manager)):
    """Get aggregate statistics over completed sessions."""
    return CustomJSONResponse(content=manager.history.analytics())
