"""Quaternion helpers, (x, y, z, w) order to match three.js on the renderer side."""
from __future__ import annotations
import numpy as np

IDENTITY = np.array([0.0, 0.0, 0.0, 1.0])

def normalize(q) -> np.ndarray:
    q = np.asarray(q, dtype=float)
    n = np.linalg.norm(q)
    return IDENTITY.copy() if n < 1e-12 else q / n

def axis_angle(axis, angle: float) -> np.ndarray:
    axis = np.asarray(axis, dtype=float)
    axis = axis / np.linalg.norm(axis)
    s = np.sin(angle/2)
    return np.array([axis[0]*s, axis[1]*s, axis[2]*s, np.cos(angle/2)])

def multiply(a, b) -> np.ndarray:
    """Hamilton product a*b (apply b, then a)."""
    ax, ay, az, aw = a; bx, by, bz, bw = b
    return np.array([
        aw*bx + ax*bw + ay*bz - az*by,
        aw*by - ax*bz + ay*bw + az*bx,
        aw*bz + ax*by - ay*bx + az*bw,
        aw*bw - ax*bx - ay*by - az*bz,
    ])

def rotate(q, v) -> np.ndarray:
    q = np.asarray(q, dtype=float); v = np.asarray(v, dtype=float)
    u, w = q[:3], q[3]
    t = 2.0*np.cross(u, v)
    return v + w*t + np.cross(u, t)

def from_matrix(m) -> np.ndarray:
    m = np.asarray(m, dtype=float)
    tr = m[0,0] + m[1,1] + m[2,2]
    if tr > 0:
        s = 0.5/np.sqrt(tr + 1.0)
        q = [(m[2,1]-m[1,2])*s, (m[0,2]-m[2,0])*s, (m[1,0]-m[0,1])*s, 0.25/s]
    elif m[0,0] > m[1,1] and m[0,0] > m[2,2]:
        s = 2.0*np.sqrt(1.0 + m[0,0] - m[1,1] - m[2,2])
        q = [0.25*s, (m[0,1]+m[1,0])/s, (m[0,2]+m[2,0])/s, (m[2,1]-m[1,2])/s]
    elif m[1,1] > m[2,2]:
        s = 2.0*np.sqrt(1.0 + m[1,1] - m[0,0] - m[2,2])
        q = [(m[0,1]+m[1,0])/s, 0.25*s, (m[1,2]+m[2,1])/s, (m[0,2]-m[2,0])/s]
    else:
        s = 2.0*np.sqrt(1.0 + m[2,2] - m[0,0] - m[1,1])
        q = [(m[0,2]+m[2,0])/s, (m[1,2]+m[2,1])/s, 0.25*s, (m[1,0]-m[0,1])/s]
    return normalize(q)

def look_at(position, target, up=(0.0, 1.0, 0.0)) -> np.ndarray:
    """Orientation whose +Z axis points from position toward target."""
    z = np.asarray(target, dtype=float) - np.asarray(position, dtype=float)
    if np.linalg.norm(z) < 1e-9:
        return IDENTITY.copy()
    z = z / np.linalg.norm(z)
    up = np.asarray(up, dtype=float)
    x = np.cross(up, z)
    if np.linalg.norm(x) < 1e-9:
        # up parallel to the view line, any perpendicular will do
        alt = np.array([1.0, 0.0, 0.0]) if abs(z[0]) < 0.9 else np.array([0.0, 0.0, 1.0])
        x = np.cross(alt, z)
    x = x / np.linalg.norm(x)
    y = np.cross(z, x)
    return from_matrix(np.column_stack([x, y, z]))

def slerp(a, b, t: float) -> np.ndarray:
    a = normalize(a); b = normalize(b)
    if t <= 0: return a
    if t >= 1: return b
    d = float(np.dot(a, b))
    if d < 0:
        b = -b; d = -d
    if d > 0.9995:
        return normalize(a + t*(b - a))
    theta = np.arccos(d)
    s = np.sin(theta)
    return (np.sin((1-t)*theta)*a + np.sin(t*theta)*b) / s
