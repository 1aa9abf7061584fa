import numpy as np
from treegesturekit.config import PoolConfig
from treegesturekit.fuse.state import FormationState
from treegesturekit.scene import quat
from treegesturekit.scene.items import build_pool, DEFAULT_GIFT_MESSAGES, FESTIVE_IMAGES, SCATTER_RADIUS

def test_default_pool():
    pool = build_pool(rng=np.random.default_rng(0))
    assert len(pool.by_category("gift")) == 30
    assert len(pool.by_category("frame")) == 15
    assert pool.get("gift-0").content == DEFAULT_GIFT_MESSAGES[0]
    assert pool.get("gift-10").content == DEFAULT_GIFT_MESSAGES[0]
    assert pool.get("frame-3").content == FESTIVE_IMAGES[3]
    assert pool.get("nope") is None and pool.get(None) is None

def test_resting_positions():
    pool = build_pool(rng=np.random.default_rng(1))
    for it in pool:
        assert np.linalg.norm(it.scatter_position) <= SCATTER_RADIUS + 1e-9
        assert it.rest_position(FormationState.TREE_SHAPE) is it.tree_position
        assert it.rest_position(FormationState.SCATTERED) is it.scatter_position
        assert 0.0 <= it.phase < 2*np.pi
    gifts_y = [it.tree_position[1] for it in pool.by_category("gift")]
    assert min(gifts_y) >= -6.0 - 1e-9 and max(gifts_y) <= 4.0 + 1e-9

def test_frames_face_outward():
    pool = build_pool(rng=np.random.default_rng(2))
    for it in pool.by_category("frame"):
        front = quat.rotate(it.rotation, (0.0, 0.0, 1.0))
        radial = np.array([it.tree_position[0], 0.0, it.tree_position[2]])
        assert np.dot(front, radial) > 0

def test_seeded_pools_match():
    a = build_pool(PoolConfig(seed=5)); b = build_pool(PoolConfig(seed=5))
    assert all(np.allclose(x.tree_position, y.tree_position) for x, y in zip(a, b))

def test_with_content_keeps_identity():
    pool = build_pool(rng=np.random.default_rng(3))
    new = pool.with_content(["  Socks ", "", "Book"], ["a.png"])
    assert [it.id for it in new] == [it.id for it in pool]
    assert new.get("gift-0").content == "Socks"
    assert new.get("gift-1").content == "Book"
    assert new.get("frame-7").content == "a.png"
    assert np.array_equal(new.get("gift-2").tree_position, pool.get("gift-2").tree_position)

def test_blank_messages_keep_previous():
    pool = build_pool(rng=np.random.default_rng(4))
    new = pool.with_content(["  ", ""])
    assert [it.content for it in new] == [it.content for it in pool]

def test_cone_surface_samples_hug_the_surface():
    from treegesturekit.scene.coordinates import cone_surface_position
    rng = np.random.default_rng(9)
    for _ in range(200):
        p = cone_surface_position(rng, 10.0, 4.0, -1.0)
        y = p[1] + 5.0 + 1.0  # height above the base
        r_at_y = (1 - y/10.0) * 4.0
        r = np.hypot(p[0], p[2])
        assert 0.9*r_at_y - 1e-9 <= r <= r_at_y + 1e-9
