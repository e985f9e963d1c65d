from fastapi import APIRouter

from models.exercise import ExerciseType, JointCalculator, get_rule

router = APIRouter()

@router.get("/exercises")
async def get_supported_exercises():
    """Get list of supported exercise types for analysis."""
    exercises = []
    for exercise_type in ExerciseType:
        rule = get_rule(exercise_type)
        exercises.append({
            "id": exercise_type.value,
            "name": exercise_type.display_name,
            "description": exercise_type.description,
            "depth_threshold": rule.depth_threshold,
            "position_threshold": rule.position_threshold,
        })

    return {"supported_exercises": exercises}

@router.get("/joints")
async def get_available_joints():
    """Get list of joint angles that can be analyzed."""
    joints = JointCalculator().get_available_joints()

    return {
        "available_joints": joints
    }
