import logging
import uuid
from collections import Counter, deque
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pandas as pd

from .analyzer import AnalysisResult
from .types import ExerciseType

logger = logging.getLogger(__name__)


class ExerciseSession:
    """
    Aggregates per-frame analysis results into a session record.

    Responsibilities:
    - Tracking session timing and repetition count
    - Averaging form scores over evaluated frames
    - Summarising the most frequent feedback

    This class does NOT handle:
    - Frame analysis
    - Persistence
    """

    def __init__(self, exercise_type: ExerciseType, session_id: Optional[str] = None,
                 start_time: Optional[datetime] = None, max_feedback_items: int = 5):
        """
        Initialize the session.

        Args:
            exercise_type: Exercise being performed
            session_id: Identifier (generated if not provided)
            start_time: Start time (now if not provided)
            max_feedback_items: Number of distinct feedback messages kept
        """
        self.session_id = session_id or str(uuid.uuid4())
        self.exercise_type = ExerciseType(exercise_type)
        self.start_time = start_time or datetime.now()
        self.end_time: Optional[datetime] = None
        self.max_feedback_items = max_feedback_items

        self.repetitions = 0
        self.frames_analyzed = 0
        self.frames_skipped = 0
        self._scores: List[float] = []
        self._feedback_counts: Counter = Counter()

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None

    @property
    def duration(self) -> float:
        """Duration in seconds; zero until the session is finished."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    @property
    def form_score(self) -> float:
        if not self._scores:
            return 0.0
        return float(sum(self._scores) / len(self._scores))

    @property
    def feedback(self) -> List[str]:
        return [message for message, _ in self._feedback_counts.most_common(self.max_feedback_items)]

    def record(self, result: AnalysisResult):
        """
        Add one frame's result to the session.

        Diagnostic frames are counted but do not affect the score or feedback.
        """
        if self.is_completed:
            raise RuntimeError(f"Session {self.session_id} is already completed")

        self.repetitions = max(self.repetitions, result.repetition_count)

        if result.is_diagnostic:
            self.frames_skipped += 1
            return

        self.frames_analyzed += 1
        self._scores.append(result.form_score)
        self._feedback_counts.update(result.feedback)

    def restart(self, exercise_type: Optional[ExerciseType] = None):
        """Clear accumulated results, optionally switching exercise."""
        if exercise_type is not None:
            self.exercise_type = ExerciseType(exercise_type)
        self.repetitions = 0
        self.frames_analyzed = 0
        self.frames_skipped = 0
        self._scores = []
        self._feedback_counts = Counter()

    def finish(self, end_time: Optional[datetime] = None) -> "ExerciseSession":
        if not self.is_completed:
            self.end_time = end_time or datetime.now()
            logger.info("Session %s finished: %d reps, score %.1f",
                        self.session_id, self.repetitions, self.form_score)
        return self

    def statistics(self) -> Dict[str, float]:
        """
        Calculate form score statistics for the session.

        Returns:
            Dictionary with mean, min, max and std of per-frame scores
        """
        scores = pd.Series(self._scores, dtype=float)
        if scores.empty:
            return {}

        return {
            'mean': float(scores.mean()),
            'min': float(scores.min()),
            'max': float(scores.max()),
            'std': float(scores.std()) if len(scores) > 1 else 0.0,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.session_id,
            "exercise_type": self.exercise_type.value,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration": self.duration,
            "repetitions": self.repetitions,
            "form_score": self.form_score,
            "feedback": self.feedback,
            "frames_analyzed": self.frames_analyzed,
            "frames_skipped": self.frames_skipped,
            "statistics": self.statistics(),
            "is_completed": self.is_completed,
        }


class WorkoutHistory:
    """In-process history of completed sessions with aggregate analytics."""

    def __init__(self, max_listed: int = 50, max_stored: int = 500):
        self.max_listed = max_listed
        # Oldest records are dropped once the store is full
        self._sessions: deque = deque(maxlen=max_stored)

    def __len__(self) -> int:
        return len(self._sessions)

    def add(self, session: ExerciseSession):
        if not session.is_completed:
            raise ValueError("Only completed sessions can be added to the history")
        self._sessions.append(session)

    def list_sessions(self) -> List[Dict[str, Any]]:
        """Completed sessions, newest first."""
        ordered = sorted(self._sessions, key=lambda s: s.start_time, reverse=True)
        return [session.to_dict() for session in ordered[:self.max_listed]]

    def _to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    'exercise_type': s.exercise_type.value,
                    'start_time': s.start_time,
                    'repetitions': s.repetitions,
                    'form_score': s.form_score,
                }
                for s in self._sessions
            ],
            columns=['exercise_type', 'start_time', 'repetitions', 'form_score'],
        )

    def analytics(self, now: Optional[datetime] = None, weeks: int = 4) -> Dict[str, Any]:
        """
        Summarise completed sessions.

        Args:
            now: Reference time for weekly buckets (defaults to now)
            weeks: Number of weekly buckets to report

        Returns:
            Totals, average form score, weekly progress and per-exercise breakdown
        """
        now = now or datetime.now()
        df = self._to_frame()

        weekly_progress = []
        for i in range(weeks - 1, -1, -1):
            week_start = now - timedelta(days=7 * i)
            week_end = week_start + timedelta(days=7)
            in_week = df[(df['start_time'] >= week_start) & (df['start_time'] < week_end)]
            weekly_progress.append({
                'week': week_start.date().isoformat(),
                'workouts': int(len(in_week)),
                'average_score': float(in_week['form_score'].mean()) if len(in_week) else 0.0,
            })

        breakdown = []
        if not df.empty:
            grouped = df.groupby('exercise_type')['form_score'].agg(['count', 'mean'])
            for exercise_type, row in grouped.iterrows():
                breakdown.append({
                    'exercise_type': exercise_type,
                    'count': int(row['count']),
                    'average_score': round(float(row['mean']), 2),
                })

        return {
            'total_workouts': int(len(df)),
            'total_repetitions': int(df['repetitions'].sum()) if not df.empty else 0,
            'average_form_score': round(float(df['form_score'].mean()), 2) if not df.empty else 0.0,
            'weekly_progress': weekly_progress,
            'exercise_breakdown': breakdown,
        }
