import math
import numpy as np
from treegesturekit.scene import quat
from treegesturekit.scene.camera import Camera

def test_rotate_axis_angle():
    q = quat.axis_angle((0, 0, 1), math.pi/2)
    assert np.allclose(quat.rotate(q, (1, 0, 0)), [0, 1, 0])

def test_multiply_composes():
    a = quat.axis_angle((0, 1, 0), 0.3); b = quat.axis_angle((0, 1, 0), 0.5)
    assert np.allclose(quat.multiply(a, b), quat.axis_angle((0, 1, 0), 0.8))

def test_slerp_endpoints_and_midpoint():
    a = quat.IDENTITY; b = quat.axis_angle((0, 1, 0), 1.0)
    assert np.allclose(quat.slerp(a, b, 0.0), a)
    assert np.allclose(quat.slerp(a, b, 1.0), b)
    assert np.allclose(quat.slerp(a, b, 0.5), quat.axis_angle((0, 1, 0), 0.5))

def test_slerp_takes_short_path():
    a = quat.IDENTITY; b = -quat.axis_angle((0, 1, 0), 0.2)
    assert np.allclose(np.abs(quat.slerp(a, b, 0.5)), np.abs(quat.axis_angle((0, 1, 0), 0.1)))

def test_look_at_points_z_at_target():
    q = quat.look_at((1.0, 2.0, 3.0), (4.0, -2.0, 3.0))
    assert np.allclose(quat.rotate(q, (0, 0, 1)), [0.6, -0.8, 0.0])

def test_look_at_straight_up():
    q = quat.look_at((0.0, 0.0, 0.0), (0.0, 5.0, 0.0))
    assert np.allclose(quat.rotate(q, (0, 0, 1)), [0, 1, 0])

def test_camera_looking_at_origin():
    cam = Camera.looking_at((0.0, 0.0, 18.0))
    assert np.allclose(cam.forward, [0, 0, -1])
    assert np.allclose(cam.up, [0, 1, 0])
    side = Camera.looking_at((10.0, 0.0, 0.0))
    assert np.allclose(side.forward, [-1, 0, 0])

def test_default_viewers():
    from treegesturekit.scene.camera import viewer
    assert np.allclose(viewer().position, [0, 0, 18])
    wide = viewer(mobile=True)
    assert np.allclose(wide.position, [0, 0, 28])
    assert np.allclose(wide.forward, [0, 0, -1])
