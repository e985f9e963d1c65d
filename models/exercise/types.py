from enum import Enum


class ExerciseType(str, Enum):
    """
    Exercises that can be analyzed.

    Options:
    - SQUAT: Bodyweight squat, counted on knee flexion
    - PUSHUP: Push-up, counted on elbow flexion
    - LUNGE: Forward lunge, counted on the front knee
    """
    SQUAT = "squat"
    PUSHUP = "pushup"
    LUNGE = "lunge"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


class RepetitionPhase(str, Enum):
    """Phase of the repetition state machine."""
    UP = "up"
    DOWN = "down"


_DISPLAY_NAMES = {
    ExerciseType.SQUAT: "Squats",
    ExerciseType.PUSHUP: "Push-ups",
    ExerciseType.LUNGE: "Lunges",
}

_DESCRIPTIONS = {
    ExerciseType.SQUAT: "Perfect your squat form with real-time feedback",
    ExerciseType.PUSHUP: "Master push-up technique with guided feedback",
    ExerciseType.LUNGE: "Execute perfect lunges with form correction",
}
