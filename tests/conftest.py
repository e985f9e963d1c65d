import math

import pytest

from models.exercise import LandmarkName as L
from models.exercise import Pose


def _leg(x, knee_angle, thigh, shin):
    """Hip, knee and ankle positions giving ``knee_angle`` at the knee."""
    rad = math.radians(knee_angle)
    hip = (x, -thigh)
    knee = (x, 0.0)
    ankle = (x + shin * math.sin(rad), -shin * math.cos(rad))
    return hip, knee, ankle


def _shoulder_above(hip, back_angle, torso):
    """Shoulder position giving ``back_angle`` at the hip, with the knee straight below."""
    rad = math.radians(back_angle)
    return (hip[0] + torso * math.sin(rad), hip[1] + torso * math.cos(rad))


def build_leg_pose(left_knee_angle, right_knee_angle, knee_gap=30.0, back_angle=180.0,
                   thigh=100.0, shin=25.0, torso=120.0, timestamp=0.0, omit=()):
    points = {}
    for side, x, knee_angle in (("left", -knee_gap / 2, left_knee_angle), ("right", knee_gap / 2, right_knee_angle)):
        hip, knee, ankle = _leg(x, knee_angle, thigh, shin)
        points[f"{side}_hip"] = hip
        points[f"{side}_knee"] = knee
        points[f"{side}_ankle"] = ankle
        points[f"{side}_shoulder"] = _shoulder_above(hip, back_angle, torso)

    points = {name: xy for name, xy in points.items() if name not in omit}
    return Pose.from_points(points, timestamp=timestamp)


def build_pushup_pose(elbow_angle, hand_width=60.0, body_angle=180.0, upper_arm=50.0,
                      forearm=50.0, timestamp=0.0, omit=()):
    points = {}
    rad = math.radians(elbow_angle)
    for side, x in (("left", -hand_width / 2), ("right", hand_width / 2)):
        shoulder = (x, 0.0)
        elbow = (x, upper_arm)
        wrist = (x + forearm * math.sin(rad), upper_arm - forearm * math.cos(rad))
        points[f"{side}_shoulder"] = shoulder
        points[f"{side}_elbow"] = elbow
        points[f"{side}_wrist"] = wrist

    # Body line: shoulder -> hip -> knee, bent by ``body_angle`` at the hip
    hip = (-hand_width / 2, -100.0)
    body_rad = math.radians(body_angle)
    points[L.LEFT_HIP] = hip
    points[L.LEFT_KNEE] = (hip[0] + 100.0 * math.sin(body_rad), hip[1] + 100.0 * math.cos(body_rad))

    points = {name: xy for name, xy in points.items() if name not in omit}
    return Pose.from_points(points, timestamp=timestamp)


@pytest.fixture
def squat_pose():
    def make(knee_angle, **kwargs):
        return build_leg_pose(knee_angle, knee_angle, **kwargs)
    return make


@pytest.fixture
def lunge_pose():
    return build_leg_pose


@pytest.fixture
def pushup_pose():
    return build_pushup_pose
