import numpy as np
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple


class LandmarkName:
    """
    Canonical landmark vocabulary.

    New names may be added; existing names keep their meaning.
    """
    NOSE = "nose"
    LEFT_EYE = "left_eye"
    RIGHT_EYE = "right_eye"
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"

    @classmethod
    def all(cls) -> List[str]:
        return [value for key, value in vars(cls).items() if key.isupper()]


# Index of each canonical landmark in MediaPipe's 33-point pose model
MEDIAPIPE_INDICES: Dict[str, int] = {
    LandmarkName.NOSE: 0,
    LandmarkName.LEFT_EYE: 2,
    LandmarkName.RIGHT_EYE: 5,
    LandmarkName.LEFT_EAR: 7,
    LandmarkName.RIGHT_EAR: 8,
    LandmarkName.LEFT_SHOULDER: 11,
    LandmarkName.RIGHT_SHOULDER: 12,
    LandmarkName.LEFT_ELBOW: 13,
    LandmarkName.RIGHT_ELBOW: 14,
    LandmarkName.LEFT_WRIST: 15,
    LandmarkName.RIGHT_WRIST: 16,
    LandmarkName.LEFT_HIP: 23,
    LandmarkName.RIGHT_HIP: 24,
    LandmarkName.LEFT_KNEE: 25,
    LandmarkName.RIGHT_KNEE: 26,
    LandmarkName.LEFT_ANKLE: 27,
    LandmarkName.RIGHT_ANKLE: 28,
}


@dataclass(frozen=True)
class Landmark:
    """A named anatomical point with 2D position and detection confidence."""
    name: str
    x: float
    y: float
    confidence: float = 1.0

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "x": self.x, "y": self.y, "confidence": self.confidence}


@dataclass(frozen=True)
class Pose:
    """
    One frame's landmarks plus its capture time.

    Poses are produced by the pose-estimation collaborator and are never
    mutated. A missing landmark is simply absent from ``landmarks``.
    """
    landmarks: Tuple[Landmark, ...] = field(default_factory=tuple)
    timestamp: float = 0.0

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        if not isinstance(self.landmarks, tuple):
            object.__setattr__(self, "landmarks", tuple(self.landmarks))

    def landmark(self, name: str) -> Optional[Landmark]:
        """Return the first landmark called ``name``, or None."""
        for landmark in self.landmarks:
            if landmark.name == name:
                return landmark
        return None

    @property
    def names(self) -> List[str]:
        return [landmark.name for landmark in self.landmarks]

    @classmethod
    def from_points(cls, points: Dict[str, Sequence[float]], timestamp: float = 0.0,
                    confidence: float = 1.0) -> "Pose":
        """
        Build a pose from a ``{name: (x, y)}`` mapping.

        Args:
            points: Landmark positions keyed by name
            timestamp: Capture time in seconds
            confidence: Confidence assigned to every landmark

        Returns:
            Pose instance
        """
        return cls(
            landmarks=tuple(Landmark(name, float(xy[0]), float(xy[1]), confidence) for name, xy in points.items()),
            timestamp=timestamp,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pose":
        landmarks = tuple(
            Landmark(
                name=item["name"],
                x=float(item["x"]),
                y=float(item["y"]),
                confidence=float(item.get("confidence", 1.0)),
            )
            for item in data.get("landmarks", [])
        )
        return cls(landmarks=landmarks, timestamp=float(data.get("timestamp", 0.0)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "landmarks": [landmark.to_dict() for landmark in self.landmarks],
        }

    @classmethod
    def from_landmark_list(cls, landmarks: Iterable[Any], timestamp: float = 0.0,
                           image_width: float = 1.0, image_height: float = 1.0) -> "Pose":
        """
        Convert a MediaPipe-style indexed landmark list into a pose.

        Only the canonical landmarks are kept. Normalised coordinates are
        scaled by the image size so that distance thresholds apply in pixels.

        Args:
            landmarks: Sequence of objects exposing ``x``, ``y`` and ``visibility``
            timestamp: Capture time in seconds
            image_width: Width used to scale ``x``
            image_height: Height used to scale ``y``

        Returns:
            Pose instance
        """
        points = list(landmarks) if landmarks is not None else []
        converted = []

        for name, index in MEDIAPIPE_INDICES.items():
            if index >= len(points):
                continue

            point = points[index]
            if not (hasattr(point, "x") and hasattr(point, "y")):
                continue

            confidence = float(getattr(point, "visibility", 1.0))
            converted.append(Landmark(
                name=name,
                x=float(point.x) * image_width,
                y=float(point.y) * image_height,
                confidence=min(max(confidence, 0.0), 1.0),
            ))

        return cls(landmarks=tuple(converted), timestamp=timestamp)
