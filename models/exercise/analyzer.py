import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .pose import Pose
from .types import ExerciseType, RepetitionPhase

logger = logging.getLogger(__name__)

UNABLE_TO_DETECT_POSE = "Unable to detect pose"

MAX_FORM_SCORE = 100.0
MIN_FORM_SCORE = 0.0


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of analyzing a single frame."""
    form_score: float
    feedback: Tuple[str, ...]
    is_in_correct_position: bool
    repetition_count: int

    @property
    def is_diagnostic(self) -> bool:
        """True when the frame could not be evaluated."""
        return self.feedback == (UNABLE_TO_DETECT_POSE,) and not self.is_in_correct_position

    def to_dict(self) -> Dict[str, Any]:
        return {
            "form_score": self.form_score,
            "feedback": list(self.feedback),
            "is_in_correct_position": self.is_in_correct_position,
            "repetition_count": self.repetition_count,
        }


@dataclass(frozen=True)
class FormCheck:
    """
    One rung of the form-scoring deduction ladder.

    ``measure`` extracts a value from the pose using the geometry helpers;
    ``fires`` decides whether that value is a form fault. A check whose
    measurement is unavailable does not fire.
    """
    message: str
    deduction: float
    measure: Callable[[Pose], Optional[float]]
    fires: Callable[[float], bool]

    def evaluate(self, pose: Pose) -> bool:
        value = self.measure(pose)
        if value is None:
            return False
        return bool(self.fires(value))


@dataclass(frozen=True)
class ExerciseRule:
    """
    Declarative description of an exercise.

    Attributes:
        exercise_type: Exercise this rule describes
        primary_angle: Extracts the angle that drives repetition counting
        depth_threshold: Angle below which the DOWN phase is entered
        position_threshold: Looser angle bound reported as "in position"
        checks: Independent form checks applied every frame
        success_message: Feedback used when no check fires
        baseline_score: Value reported by ``current_form_score``
    """
    exercise_type: ExerciseType
    primary_angle: Callable[[Pose], Optional[float]]
    depth_threshold: float
    position_threshold: float
    checks: Tuple[FormCheck, ...] = field(default_factory=tuple)
    success_message: str = "Great form!"
    baseline_score: float = MAX_FORM_SCORE


class RepetitionCounter:
    """
    Two-state repetition machine shared by every exercise.

    A repetition is counted on the UP -> DOWN transition, so holding the
    bottom position never counts twice.
    """

    def __init__(self, depth_threshold: float):
        self.depth_threshold = depth_threshold
        self.count = 0
        self.phase = RepetitionPhase.UP

    @property
    def is_down(self) -> bool:
        return self.phase == RepetitionPhase.DOWN

    def update(self, angle: float) -> bool:
        """
        Advance the machine with this frame's primary angle.

        Args:
            angle: Primary joint angle in degrees

        Returns:
            True if a new repetition was counted on this frame
        """
        if angle < self.depth_threshold:
            if self.phase == RepetitionPhase.UP:
                self.phase = RepetitionPhase.DOWN
                self.count += 1
                return True
            return False

        self.phase = RepetitionPhase.UP
        return False

    def reset(self):
        self.count = 0
        self.phase = RepetitionPhase.UP


class ExerciseAnalyzer(ABC):
    """Contract implemented by every exercise analyzer."""

    @abstractmethod
    def analyze(self, pose: Pose) -> AnalysisResult:
        """Evaluate one frame, advancing repetition state."""

    @abstractmethod
    def current_form_score(self) -> float:
        """Form score reported between frames."""

    @abstractmethod
    def current_feedback(self) -> List[str]:
        """Feedback produced by the most recent frame."""

    @abstractmethod
    def reset(self):
        """Return to the initial state without reallocating."""


class RuleBasedAnalyzer(ExerciseAnalyzer):
    """
    Analyzer driven entirely by an ``ExerciseRule``.

    Responsibilities:
    - Repetition counting through ``RepetitionCounter``
    - Form scoring through the rule's deduction ladder
    - Feedback for the current frame

    This class does NOT handle:
    - Pose detection
    - Session aggregation
    - Thread safety (one analyzer per session)
    """

    rule: Optional[ExerciseRule] = None

    def __init__(self, rule: Optional[ExerciseRule] = None):
        """
        Initialize the analyzer.

        Args:
            rule: Rule to apply; defaults to the class-level rule
        """
        self.rule = rule or self.rule
        if self.rule is None:
            raise ValueError(f"{type(self).__name__} requires an exercise rule")

        self.counter = RepetitionCounter(self.rule.depth_threshold)
        self.last_feedback: List[str] = []

    @property
    def exercise_type(self) -> ExerciseType:
        return self.rule.exercise_type

    @property
    def repetitions(self) -> int:
        return self.counter.count

    @property
    def is_in_down_position(self) -> bool:
        return self.counter.is_down

    def analyze(self, pose: Pose) -> AnalysisResult:
        self.last_feedback = []

        angle = self.rule.primary_angle(pose)
        if angle is None:
            logger.debug("%s: primary landmarks missing at t=%s", self.exercise_type.value, pose.timestamp)
            return AnalysisResult(
                form_score=MIN_FORM_SCORE,
                feedback=(UNABLE_TO_DETECT_POSE,),
                is_in_correct_position=False,
                repetition_count=self.counter.count,
            )

        if self.counter.update(angle):
            logger.debug("%s: repetition %d counted at %.1f degrees",
                         self.exercise_type.value, self.counter.count, angle)

        form_score = MAX_FORM_SCORE
        for check in self.rule.checks:
            if check.evaluate(pose):
                form_score -= check.deduction
                self.last_feedback.append(check.message)

        if not self.last_feedback:
            self.last_feedback.append(self.rule.success_message)

        return AnalysisResult(
            form_score=min(max(form_score, MIN_FORM_SCORE), MAX_FORM_SCORE),
            feedback=tuple(self.last_feedback),
            is_in_correct_position=angle < self.rule.position_threshold,
            repetition_count=self.counter.count,
        )

    def current_form_score(self) -> float:
        # Fixed per-exercise value, not a running average of frames
        return self.rule.baseline_score

    def current_feedback(self) -> List[str]:
        return list(self.last_feedback)

    def reset(self):
        self.counter.reset()
        self.last_feedback = []
