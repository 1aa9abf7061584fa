from __future__ import annotations
import numpy as np

def sphere_position(rng: np.random.Generator, radius: float) -> np.ndarray:
    """Uniform point inside a sphere (cube-root radius keeps the volume density flat)."""
    theta = 2*np.pi*rng.random()
    phi = np.arccos(2*rng.random() - 1)
    r = np.cbrt(rng.random()) * radius
    return np.array([r*np.sin(phi)*np.cos(theta), r*np.sin(phi)*np.sin(theta), r*np.cos(phi)])

def cone_surface_position(rng: np.random.Generator, height: float, base_radius: float,
                          y_offset: float=0.0) -> np.ndarray:
    """Point near the surface of an upright cone centred vertically on y_offset."""
    # power < 1 pushes samples toward the narrow top
    y = height * (1 - rng.random()**0.7)
    r_at_y = (1 - y/height) * base_radius
    theta = rng.random() * 2*np.pi
    r = r_at_y*rng.uniform(0.9, 1.0)
    return np.array([r*np.cos(theta), y - height/2 + y_offset, r*np.sin(theta)])
