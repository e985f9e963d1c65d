import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from .analyzer import AnalysisResult, RuleBasedAnalyzer
from .joint_calculator import JointCalculator
from .pose import Pose
from .rules import create_analyzer
from .session import ExerciseSession, WorkoutHistory
from .types import ExerciseType

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is not active."""


class SessionLimitError(RuntimeError):
    """Raised when no more sessions can be started."""


@dataclass
class PipelineConfig:
    """Configuration for an exercise pipeline."""
    exercise_type: ExerciseType = ExerciseType.SQUAT
    max_feedback_items: int = 5
    include_joint_angles: bool = False


class ExercisePipeline:
    """
    ExercisePipeline connects the analysis modules for one user session.

    This class orchestrates the process:
    1. The selected analyzer evaluates each pose
    2. JointCalculator optionally reports joint angles
    3. ExerciseSession aggregates the results

    Calls are serialised with a lock, since analyzer state is mutated in place.
    """

    def __init__(self, config: Optional[PipelineConfig] = None, session_id: Optional[str] = None,
                 joint_calculator: Optional[JointCalculator] = None):
        """
        Initialize the pipeline.

        Args:
            config: Configuration for the pipeline
            session_id: Identifier for the session (generated if not provided)
            joint_calculator: Shared joint calculator
        """
        self.config = config or PipelineConfig()
        self.joint_calculator = joint_calculator or JointCalculator()
        self.analyzer: RuleBasedAnalyzer = create_analyzer(self.config.exercise_type)
        self.session = ExerciseSession(
            self.config.exercise_type,
            session_id=session_id,
            max_feedback_items=self.config.max_feedback_items,
        )
        self.last_result: Optional[AnalysisResult] = None
        self._lock = threading.Lock()

    @property
    def session_id(self) -> str:
        return self.session.session_id

    @property
    def exercise_type(self) -> ExerciseType:
        return self.analyzer.exercise_type

    def process_pose(self, pose: Pose, include_angles: Optional[bool] = None) -> Dict:
        """
        Analyze one frame and record it on the session.

        Args:
            pose: Pose for this frame
            include_angles: Whether to add joint angles (config default if None)

        Returns:
            Dictionary with the analysis result and, optionally, joint angles

        Raises:
            SessionNotFoundError: If the session has already been ended
        """
        if include_angles is None:
            include_angles = self.config.include_joint_angles

        with self._lock:
            if self.session.is_completed:
                raise SessionNotFoundError(self.session_id)
            result = self.analyzer.analyze(pose)
            self.session.record(result)
            self.last_result = result

        response = result.to_dict()
        if include_angles:
            response['joint_angles'] = self.joint_calculator.calculate_joint_angles(pose)
        return response

    def select_exercise(self, exercise_type: ExerciseType):
        """Switch exercise; counters restart from zero."""
        exercise_type = ExerciseType(exercise_type)
        with self._lock:
            if exercise_type != self.analyzer.exercise_type:
                self.analyzer = create_analyzer(exercise_type)
            else:
                self.analyzer.reset()
            self.config.exercise_type = exercise_type
            self.session.restart(exercise_type)
            self.last_result = None
        logger.info("Session %s switched to %s", self.session_id, exercise_type.value)

    def reset(self):
        with self._lock:
            self.analyzer.reset()
            self.session.restart()
            self.last_result = None

    def finish(self) -> ExerciseSession:
        with self._lock:
            return self.session.finish()

    def summary(self) -> Dict:
        with self._lock:
            summary = self.session.to_dict()
            summary['current_form_score'] = self.analyzer.current_form_score()
            summary['current_feedback'] = self.analyzer.current_feedback()
            summary['is_in_down_position'] = self.analyzer.is_in_down_position
        return summary


class PipelineManager:
    """Registry of active pipelines keyed by session id."""

    def __init__(self, max_sessions: int = 100, max_feedback_items: int = 5,
                 include_joint_angles: bool = False, max_stored_workouts: int = 500):
        self.max_sessions = max_sessions
        self.max_feedback_items = max_feedback_items
        self.include_joint_angles = include_joint_angles
        self.joint_calculator = JointCalculator()
        self.history = WorkoutHistory(max_stored=max_stored_workouts)
        self._pipelines: Dict[str, ExercisePipeline] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._pipelines)

    def start(self, exercise_type: ExerciseType) -> ExercisePipeline:
        config = PipelineConfig(
            exercise_type=ExerciseType(exercise_type),
            max_feedback_items=self.max_feedback_items,
            include_joint_angles=self.include_joint_angles,
        )
        with self._lock:
            if len(self._pipelines) >= self.max_sessions:
                raise SessionLimitError(f"Maximum of {self.max_sessions} active sessions reached")
            pipeline = ExercisePipeline(config, joint_calculator=self.joint_calculator)
            self._pipelines[pipeline.session_id] = pipeline

        logger.info("Started %s session %s", config.exercise_type.value, pipeline.session_id)
        return pipeline

    def get(self, session_id: str) -> ExercisePipeline:
        with self._lock:
            pipeline = self._pipelines.get(session_id)
        if pipeline is None:
            raise SessionNotFoundError(session_id)
        return pipeline

    def end(self, session_id: str) -> ExerciseSession:
        with self._lock:
            pipeline = self._pipelines.pop(session_id, None)
        if pipeline is None:
            raise SessionNotFoundError(session_id)

        session = pipeline.finish()
        self.history.add(session)
        return session

    def active_sessions(self) -> List[str]:
        with self._lock:
            return list(self._pipelines.keys())
