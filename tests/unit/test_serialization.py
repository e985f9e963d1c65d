import json
from datetime import datetime

import numpy as np
from models.exercise import AnalysisResult, ExerciseType, Landmark
from utils.serialization import CustomJSONResponse, sanitize_for_json

class TestSerialization:

    def test_analysis_result(self):
        """Test results are emitted through their own dictionary form."""
        result = AnalysisResult(np.float64(85.0), ("Keep your back straighter",), False, np.int64(2))
        data = sanitize_for_json({"result": result, "exercise": ExerciseType.SQUAT})

        assert data == {
            "result": {
                "form_score": 85.0,
                "feedback": ["Keep your back straighter"],
                "is_in_correct_position": False,
                "repetition_count": 2,
            },
            "exercise": "squat",
        }
        assert type(data["result"]["form_score"]) is float
        assert type(data["result"]["repetition_count"]) is int

    def test_landmark(self):
        assert sanitize_for_json(Landmark("nose", 0.5, 0.25)) == {
            "name": "nose", "x": 0.5, "y": 0.25, "confidence": 1.0,
        }

    def test_non_finite_floats(self):
        """Test NaN and infinity become null."""
        data = sanitize_for_json({"mean": float("nan"), "std": np.float64("inf"), "angles": np.array([1.0, np.nan])})
        assert data == {"mean": None, "std": None, "angles": [1.0, None]}

    def test_datetimes_and_keys(self):
        data = sanitize_for_json({1: datetime(2025, 10, 23, 12, 0), "pair": (1, 2)})
        assert data == {"1": "2025-10-23T12:00:00", "pair": [1, 2]}

    def test_response_renders(self):
        response = CustomJSONResponse(content={"score": np.float32(0.5), "missing": float("nan")})
        assert json.loads(response.body) == {"score": 0.5, "missing": None}
