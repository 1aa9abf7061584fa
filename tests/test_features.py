import logging
import numpy as np
import pytest
from treegesturekit.config import FeatureConfig
from treegesturekit.hand.features import extract_features, as_points, is_extended, LandmarkError
from fake_hands import fake_pts, fist, open_hand

def test_open_hand_all_extended():
    f = extract_features(open_hand())
    assert f.thumb_extended and f.index_extended and f.middle_extended
    assert f.ring_extended and f.pinky_extended
    assert f.extended_count == 5
    assert not f.is_pinching

def test_fist_nothing_extended():
    f = extract_features(fist())
    assert f.extended_count == 0

def test_extension_is_scale_invariant():
    pts = fake_pts(middle=False)
    small = pts.copy()
    small[:, :2] = (pts[:, :2] - 0.5) * 0.5 + 0.5
    assert is_extended(pts, 8, 5) == is_extended(small, 8, 5) is True
    assert is_extended(pts, 12, 9) == is_extended(small, 12, 9) is False

def test_pinch_distance_and_threshold():
    pts = fake_pts(pinch=True)
    f = extract_features(pts)
    assert f.pinch_distance == pytest.approx(0.02)
    assert f.is_pinching
    assert not extract_features(pts, FeatureConfig(pinch_threshold=0.01)).is_pinching

def test_depth_is_ignored():
    a = fake_pts(); b = a.copy(); b[:, 2] = 5.0
    assert extract_features(a) == extract_features(b)

def test_detector_dict_input():
    f = extract_features({"pts": open_hand(), "handedness": "right"})
    assert f.extended_count == 5

def test_absent_hand():
    assert extract_features(None) is None

def test_wrong_point_count_rejected(caplog):
    with caplog.at_level(logging.WARNING):
        assert extract_features(np.zeros((20,3))) is None
    assert "rejecting landmark frame" in caplog.text

def test_as_points_contract():
    with pytest.raises(LandmarkError):
        as_points(np.zeros((21,1)))
    with pytest.raises(LandmarkError):
        as_points({"handedness": "left"})
    bad = open_hand(); bad[3,0] = np.nan
    with pytest.raises(LandmarkError):
        as_points(bad)
    assert as_points(open_hand().tolist()).shape == (21,3)
