"""
Exercise analysis module: repetition counting and form scoring from poses.
"""

from .pose import MEDIAPIPE_INDICES, Landmark, LandmarkName, Pose
from .joint_calculator import JointCalculator, calculate_angle, calculate_distance, get_landmark
from .types import ExerciseType, RepetitionPhase
from .analyzer import (
    AnalysisResult,
    ExerciseAnalyzer,
    ExerciseRule,
    FormCheck,
    RepetitionCounter,
    RuleBasedAnalyzer,
    UNABLE_TO_DETECT_POSE,
)
from .rules import LungeAnalyzer, PushUpAnalyzer, SquatAnalyzer, create_analyzer, get_rule
from .session import ExerciseSession, WorkoutHistory
from .pipeline import ExercisePipeline, PipelineConfig, PipelineManager, SessionLimitError, SessionNotFoundError

__all__ = [
    'MEDIAPIPE_INDICES',
    'Landmark',
    'LandmarkName',
    'Pose',
    'JointCalculator',
    'calculate_angle',
    'calculate_distance',
    'get_landmark',
    'ExerciseType',
    'RepetitionPhase',
    'AnalysisResult',
    'ExerciseAnalyzer',
    'ExerciseRule',
    'FormCheck',
    'RepetitionCounter',
    'RuleBasedAnalyzer',
    'UNABLE_TO_DETECT_POSE',
    'SquatAnalyzer',
    'PushUpAnalyzer',
    'LungeAnalyzer',
    'create_analyzer',
    'get_rule',
    'ExerciseSession',
    'WorkoutHistory',
    'ExercisePipeline',
    'PipelineConfig',
    'PipelineManager',
    'SessionLimitError',
    'SessionNotFoundError',
]
