import pytest
from types import SimpleNamespace
from fastapi.testclient import TestClient
from main import app
from api.routers.sessions import get_manager
from models.exercise import MEDIAPIPE_INDICES, PipelineManager, Pose

def to_landmark_list(pose, width, height):
    """Lay a pose out as a normalised 33-point landmark list."""
    points = [SimpleNamespace(x=0.0, y=0.0, visibility=0.0) for _ in range(33)]
    for landmark in pose.landmarks:
        points[MEDIAPIPE_INDICES[landmark.name]] = SimpleNamespace(
            x=landmark.x / width, y=landmark.y / height, visibility=landmark.confidence)
    return points

class TestFullWorkflow:

    def setup_method(self):
        self.manager = PipelineManager()
        app.dependency_overrides[get_manager] = lambda: self.manager
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_workout_with_exercise_switch(self, squat_pose, pushup_pose):
        """Test a workout of squats then push-ups, ending with analytics."""
        session_id = self.client.post("/api/v1/sessions", json={"exercise_type": "squat"}).json()["session_id"]

        # Two squats, the second with knees too far apart
        frames = [squat_pose(a) for a in (175, 80, 170)] + [squat_pose(a, knee_gap=70) for a in (75, 172)]
        for i, pose in enumerate(frames):
            data = pose.to_dict()
            data["timestamp"] = i / 30
            result = self.client.post(f"/api/v1/sessions/{session_id}/frames", json=data).json()

        assert result["repetition_count"] == 2
        assert result["feedback"] == ["Keep knees closer together"]
        assert result["form_score"] == 80.0

        summary = self.client.get(f"/api/v1/sessions/{session_id}").json()
        assert summary["form_score"] == pytest.approx(92.0)
        assert summary["feedback"][0] == "Great form! Keep it up!"

        # Switching exercise restarts counting
        self.client.put(f"/api/v1/sessions/{session_id}/exercise", json={"exercise_type": "pushup"})
        for elbow_angle in (170, 85, 165):
            result = self.client.post(f"/api/v1/sessions/{session_id}/frames",
                                      json=pushup_pose(elbow_angle).to_dict()).json()
        assert result["repetition_count"] == 1

        record = self.client.post(f"/api/v1/sessions/{session_id}/end").json()
        assert record["exercise_type"] == "pushup"
        assert record["repetitions"] == 1

        analytics = self.client.get("/api/v1/analytics/workouts").json()
        assert analytics["total_workouts"] == 1
        assert analytics["exercise_breakdown"][0]["exercise_type"] == "pushup"

    def test_landmark_list_frames(self, lunge_pose):
        """Test poses converted from an indexed landmark list."""
        pipeline = self.manager.start("lunge")
        width, height = 640.0, 480.0

        for left, right in [(170, 172), (85, 140), (165, 170)]:
            # Shift into image space so normalised coordinates stay positive
            pose = lunge_pose(left, right)
            shifted = Pose.from_points({lm.name: (lm.x + 320, lm.y + 300) for lm in pose.landmarks})
            converted = Pose.from_landmark_list(to_landmark_list(shifted, width, height),
                                                image_width=width, image_height=height)
            result = pipeline.process_pose(converted)

        assert result["repetition_count"] == 1
        assert result["feedback"] == ["Excellent lunge form!"]
