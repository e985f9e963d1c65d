import pytest
from types import SimpleNamespace
from models.exercise import Landmark, LandmarkName, Pose

class TestPose:

    def test_landmark_vocabulary(self):
        """Test the canonical landmark names."""
        names = LandmarkName.all()
        assert len(names) == 17
        assert "left_knee" in names
        assert "nose" in names

    def test_pose_is_immutable(self):
        pose = Pose.from_points({"nose": (0, 0)})
        with pytest.raises(AttributeError):
            pose.timestamp = 5.0
        assert isinstance(pose.landmarks, tuple)

    def test_list_landmarks_stored_as_tuple(self):
        pose = Pose(landmarks=[Landmark("nose", 1, 2)])
        assert pose.landmarks == (Landmark("nose", 1, 2),)

    def test_dict_round_trip(self):
        """Test converting to and from JSON-style dictionaries."""
        data = {
            "timestamp": 1.5,
            "landmarks": [
                {"name": "left_knee", "x": 10, "y": 20, "confidence": 0.8},
                {"name": "nose", "x": 1, "y": 2},
            ],
        }
        pose = Pose.from_dict(data)
        assert pose.timestamp == 1.5
        assert pose.landmark("nose").confidence == 1.0
        assert Pose.from_dict(pose.to_dict()) == pose

    def test_from_landmark_list(self):
        """Test converting a MediaPipe-style landmark list."""
        points = [SimpleNamespace(x=i / 100, y=i / 50, visibility=0.9) for i in range(33)]
        pose = Pose.from_landmark_list(points, timestamp=2.0, image_width=100, image_height=200)

        assert len(pose.landmarks) == 17
        left_knee = pose.landmark("left_knee")
        assert left_knee.x == pytest.approx(25.0)
        assert left_knee.y == pytest.approx(100.0)
        assert left_knee.confidence == pytest.approx(0.9)
        assert pose.timestamp == 2.0

    def test_from_landmark_list_partial(self):
        """Test short or empty lists only keep available landmarks."""
        points = [SimpleNamespace(x=0.5, y=0.5, visibility=1.2) for _ in range(12)]
        pose = Pose.from_landmark_list(points)
        assert set(pose.names) == {"nose", "left_eye", "right_eye", "left_ear", "right_ear", "left_shoulder"}
        assert pose.landmark("nose").confidence == 1.0

        assert Pose.from_landmark_list(None).landmarks == ()
