import numpy as np
from typing import Dict, List, Optional, Tuple

from .pose import Landmark, LandmarkName, Pose


def get_landmark(pose: Pose, name: str) -> Optional[Landmark]:
    """
    Look up a landmark by name.

    Args:
        pose: Pose to search
        name: Landmark name

    Returns:
        The first matching landmark, or None if the pose does not contain it
    """
    return pose.landmark(name)


def calculate_angle(pose: Pose, a: str, b: str, c: str) -> Optional[float]:
    """
    Calculate the angle at vertex ``b`` formed by landmarks ``a`` and ``c``.

    Args:
        pose: Pose holding the landmarks
        a: First landmark name
        b: Vertex landmark name
        c: Third landmark name

    Returns:
        Angle in degrees within [0, 180], or None if a landmark is missing or
        two of the points coincide or are not finite
    """
    point_a = get_landmark(pose, a)
    point_b = get_landmark(pose, b)
    point_c = get_landmark(pose, c)

    if point_a is None or point_b is None or point_c is None:
        return None

    # Create vectors
    ba = point_a.position - point_b.position
    bc = point_c.position - point_b.position

    magnitude_ba = np.linalg.norm(ba)
    magnitude_bc = np.linalg.norm(bc)

    # Non-finite coordinates are treated like missing landmarks
    if not (np.isfinite(magnitude_ba) and np.isfinite(magnitude_bc)):
        return None

    if magnitude_ba == 0 or magnitude_bc == 0:
        return None

    cosine_angle = np.dot(ba, bc) / (magnitude_ba * magnitude_bc)

    # Make sure the value is valid for arccos
    cosine_angle = np.clip(cosine_angle, -1.0, 1.0)

    return float(np.degrees(np.arccos(cosine_angle)))


def calculate_distance(pose: Pose, a: str, b: str) -> Optional[float]:
    """
    Calculate the Euclidean distance between two landmarks.

    Args:
        pose: Pose holding the landmarks
        a: First landmark name
        b: Second landmark name

    Returns:
        Distance in the pose's coordinate units, or None if a landmark is missing
        or a coordinate is not finite
    """
    point_a = get_landmark(pose, a)
    point_b = get_landmark(pose, b)

    if point_a is None or point_b is None:
        return None

    distance = np.linalg.norm(point_a.position - point_b.position)
    if not np.isfinite(distance):
        return None

    return float(distance)


class JointCalculator:
    """
    JointCalculator reports named joint angles for a pose.

    Responsibilities:
    - Joint mapping definitions
    - Joint angle calculations
    - Confidence scoring for calculated angles

    This class does NOT handle:
    - Pose detection
    - Repetition counting
    - Form scoring
    """

    def __init__(self):
        """Initialize the joint calculator."""
        self.joint_mappings = self._create_joint_mappings()

    def _create_joint_mappings(self) -> Dict[str, Tuple[str, str, str]]:
        """
        Create mappings for joint connections to calculate angles.

        Returns:
            Dictionary of joint name to (first, vertex, third) landmark names
        """
        return {
            'LEFT_SHOULDER': (LandmarkName.LEFT_EAR, LandmarkName.LEFT_SHOULDER, LandmarkName.LEFT_ELBOW),
            'LEFT_ELBOW': (LandmarkName.LEFT_SHOULDER, LandmarkName.LEFT_ELBOW, LandmarkName.LEFT_WRIST),
            'LEFT_HIP': (LandmarkName.LEFT_SHOULDER, LandmarkName.LEFT_HIP, LandmarkName.LEFT_KNEE),
            'LEFT_KNEE': (LandmarkName.LEFT_HIP, LandmarkName.LEFT_KNEE, LandmarkName.LEFT_ANKLE),
            'RIGHT_SHOULDER': (LandmarkName.RIGHT_EAR, LandmarkName.RIGHT_SHOULDER, LandmarkName.RIGHT_ELBOW),
            'RIGHT_ELBOW': (LandmarkName.RIGHT_SHOULDER, LandmarkName.RIGHT_ELBOW, LandmarkName.RIGHT_WRIST),
            'RIGHT_HIP': (LandmarkName.RIGHT_SHOULDER, LandmarkName.RIGHT_HIP, LandmarkName.RIGHT_KNEE),
            'RIGHT_KNEE': (LandmarkName.RIGHT_HIP, LandmarkName.RIGHT_KNEE, LandmarkName.RIGHT_ANKLE),
            # Additional joints for better analysis
            'NECK': (LandmarkName.LEFT_SHOULDER, LandmarkName.NOSE, LandmarkName.RIGHT_SHOULDER),
        }

    def calculate_joint_angles(self, pose: Pose, joints_to_process: Optional[List[str]] = None) -> Dict:
        """
        Calculate angles for specified joints.

        Args:
            pose: Pose to measure
            joints_to_process: Optional list of joints to process (all if None)

        Returns:
            Dictionary of joint angles and confidence scores
        """
        # If no specific joints provided, process all joints
        if not joints_to_process:
            joints_to_process = list(self.joint_mappings.keys())

        angles_data = {}

        for joint_name in joints_to_process:
            if joint_name not in self.joint_mappings:
                continue

            name_a, name_b, name_c = self.joint_mappings[joint_name]

            angle = calculate_angle(pose, name_a, name_b, name_c)
            if angle is None:
                continue

            # Confidence is the weakest of the three landmarks
            confidence = min(
                get_landmark(pose, name).confidence for name in (name_a, name_b, name_c)
            )

            angles_data[joint_name] = {
                'angle': angle,
                'confidence': confidence
            }

        return angles_data

    def add_custom_joint(self, joint_name: str, landmark_a: str, landmark_b: str, landmark_c: str):
        """
        Add a custom joint mapping.

        Args:
            joint_name: Name of the joint
            landmark_a: First landmark name
            landmark_b: Vertex landmark name
            landmark_c: Third landmark name
        """
        self.joint_mappings[joint_name] = (landmark_a, landmark_b, landmark_c)

    def get_available_joints(self) -> List[str]:
        """
        Get list of available joint names.

        Returns:
            List of joint names
        """
        return list(self.joint_mappings.keys())
