import pytest
from treegesturekit.filters.stabilizer import GestureStabilizer, UNKNOWN
from treegesturekit.hand.gestures import Gesture

F, O = Gesture.FIST, Gesture.OPEN

def test_confirms_on_nth_frame_only():
    st = GestureStabilizer(window=4)
    assert st.confirmed == UNKNOWN
    out = [st.push(F) for _ in range(4)]
    assert out == [None, None, None, F]
    assert st.confirmed == F

def test_single_outlier_resets_run():
    st = GestureStabilizer(window=4)
    for g in [F, F, F, O, F]:
        assert st.push(g) is None
    assert st.push(F) is None
    assert st.push(F) is None
    assert st.push(F) == F

def test_outlier_after_confirmation():
    st = GestureStabilizer(window=4)
    for _ in range(4): st.push(F)
    for g in [F, F, F, O, F]:
        assert st.push(g) is None
    for _ in range(3): assert st.push(O) is None
    assert st.push(O) == O

def test_already_confirmed_label_is_not_reemitted():
    st = GestureStabilizer(window=3)
    events = [st.push(F) for _ in range(10)]
    assert events.count(F) == 1

def test_none_label_confirms_like_any_other():
    st = GestureStabilizer(window=2)
    assert st.push(Gesture.NONE) is None
    assert st.push(Gesture.NONE) == Gesture.NONE

def test_history_is_bounded():
    st = GestureStabilizer(window=5)
    for _ in range(12): st.push(O)
    assert len(st.history) == 5

def test_window_must_be_positive():
    with pytest.raises(ValueError):
        GestureStabilizer(window=0)
