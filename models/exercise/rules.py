"""
Exercise rule sets.

Each exercise is declared as data: the angle that counts repetitions, its
thresholds and the form checks applied every frame. Registering a new
``ExerciseRule`` (and optionally a named analyzer subclass) is all it takes
to support another exercise.
"""

from typing import Callable, Dict, Optional, Type

from .analyzer import ExerciseRule, FormCheck, RuleBasedAnalyzer
from .joint_calculator import calculate_angle, calculate_distance
from .pose import LandmarkName as L
from .pose import Pose
from .types import ExerciseType

DEPTH_THRESHOLD = 90.0
POSITION_THRESHOLD = 100.0


def angle(a: str, b: str, c: str) -> Callable[[Pose], Optional[float]]:
    return lambda pose: calculate_angle(pose, a, b, c)


def distance(a: str, b: str) -> Callable[[Pose], Optional[float]]:
    return lambda pose: calculate_distance(pose, a, b)


def mean_of(*extractors: Callable[[Pose], Optional[float]]) -> Callable[[Pose], Optional[float]]:
    """Mean of several angles; None if any of them is unavailable."""
    def extract(pose: Pose) -> Optional[float]:
        values = [extractor(pose) for extractor in extractors]
        if any(value is None for value in values):
            return None
        return sum(values) / len(values)
    return extract


def min_of(*extractors: Callable[[Pose], Optional[float]]) -> Callable[[Pose], Optional[float]]:
    """Smallest of several angles; None if any of them is unavailable."""
    def extract(pose: Pose) -> Optional[float]:
        values = [extractor(pose) for extractor in extractors]
        if any(value is None for value in values):
            return None
        return min(values)
    return extract


LEFT_KNEE_ANGLE = angle(L.LEFT_HIP, L.LEFT_KNEE, L.LEFT_ANKLE)
RIGHT_KNEE_ANGLE = angle(L.RIGHT_HIP, L.RIGHT_KNEE, L.RIGHT_ANKLE)
LEFT_ELBOW_ANGLE = angle(L.LEFT_SHOULDER, L.LEFT_ELBOW, L.LEFT_WRIST)
RIGHT_ELBOW_ANGLE = angle(L.RIGHT_SHOULDER, L.RIGHT_ELBOW, L.RIGHT_WRIST)
LEFT_HIP_ANGLE = angle(L.LEFT_SHOULDER, L.LEFT_HIP, L.LEFT_KNEE)


SQUAT_RULE = ExerciseRule(
    exercise_type=ExerciseType.SQUAT,
    primary_angle=mean_of(LEFT_KNEE_ANGLE, RIGHT_KNEE_ANGLE),
    depth_threshold=DEPTH_THRESHOLD,
    position_threshold=POSITION_THRESHOLD,
    checks=(
        FormCheck("Keep knees closer together", 20, distance(L.LEFT_KNEE, L.RIGHT_KNEE), lambda d: d > 50),
        FormCheck("Keep your back straighter", 15, LEFT_HIP_ANGLE, lambda a: a < 160),
        FormCheck("Keep knees over your toes", 10, distance(L.LEFT_KNEE, L.LEFT_ANKLE), lambda d: d > 30),
    ),
    success_message="Great form! Keep it up!",
    baseline_score=85.0,
)

PUSHUP_RULE = ExerciseRule(
    exercise_type=ExerciseType.PUSHUP,
    primary_angle=mean_of(LEFT_ELBOW_ANGLE, RIGHT_ELBOW_ANGLE),
    depth_threshold=DEPTH_THRESHOLD,
    position_threshold=POSITION_THRESHOLD,
    checks=(
        FormCheck("Keep your body straight", 20, LEFT_HIP_ANGLE, lambda a: a < 170),
        FormCheck("Adjust hand placement", 15, distance(L.LEFT_WRIST, L.RIGHT_WRIST), lambda d: d < 40 or d > 80),
    ),
    success_message="Perfect push-up form!",
    baseline_score=90.0,
)

# The front leg is the one with the smaller knee angle
LUNGE_RULE = ExerciseRule(
    exercise_type=ExerciseType.LUNGE,
    primary_angle=min_of(LEFT_KNEE_ANGLE, RIGHT_KNEE_ANGLE),
    depth_threshold=DEPTH_THRESHOLD,
    position_threshold=POSITION_THRESHOLD,
    checks=(
        FormCheck("Keep knees aligned", 15, distance(L.LEFT_KNEE, L.RIGHT_KNEE), lambda d: d > 40),
        FormCheck("Keep torso upright", 10, LEFT_HIP_ANGLE, lambda a: a < 160),
    ),
    success_message="Excellent lunge form!",
    baseline_score=87.0,
)


class SquatAnalyzer(RuleBasedAnalyzer):
    rule = SQUAT_RULE


class PushUpAnalyzer(RuleBasedAnalyzer):
    rule = PUSHUP_RULE


class LungeAnalyzer(RuleBasedAnalyzer):
    rule = LUNGE_RULE


EXERCISE_ANALYZERS: Dict[ExerciseType, Type[RuleBasedAnalyzer]] = {
    ExerciseType.SQUAT: SquatAnalyzer,
    ExerciseType.PUSHUP: PushUpAnalyzer,
    ExerciseType.LUNGE: LungeAnalyzer,
}


def get_rule(exercise_type) -> ExerciseRule:
    return EXERCISE_ANALYZERS[ExerciseType(exercise_type)].rule


def create_analyzer(exercise_type) -> RuleBasedAnalyzer:
    """
    Create a fresh analyzer for an exercise.

    Args:
        exercise_type: ``ExerciseType`` or its string value

    Returns:
        New analyzer instance

    Raises:
        ValueError: If the exercise is not supported
    """
    try:
        analyzer_cls = EXERCISE_ANALYZERS[ExerciseType(exercise_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported exercise type: {exercise_type}")
    return analyzer_cls()
