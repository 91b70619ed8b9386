"""
===============================================================================
COSMORISK - Reference Frame Transformations
===============================================================================
Supports: Perifocal (orbital plane) -> Heliocentric ecliptic.

Every orbit the kernel reconstructs is first laid out in its own perifocal
frame (focus at the Sun, x-axis toward perihelion, z-axis along the orbit
normal) and then rotated into the heliocentric ecliptic frame by the
classical 3-1-3 Euler sequence (RAAN, inclination, argument of perihelion).

All functions operate on NumPy arrays and return NumPy arrays.  Angles are
in radians.

References
----------
    [1] Vallado, "Fundamentals of Astrodynamics and Applications", 4th ed.
    [2] Curtis, "Orbital Mechanics for Engineering Students", 4th ed.
===============================================================================
"""

import numpy as np


# =============================================================================
# PERIFOCAL -> ECLIPTIC
# =============================================================================

def perifocal_rotation(raan: float, inc: float, arg_perihelion: float) -> np.ndarray:
    """
    Rotation matrix taking perifocal coordinates to the heliocentric
    ecliptic frame.

    In the active sense the rotation is R = Rz(RAAN) * Rx(i) * Rz(omega),
    which equals the product of frame rotations Rz(-RAAN) Rx(-i) Rz(-omega).

    The entries are expanded in closed form so the six trigonometric
    evaluations happen once per orbit, not once per sample:

        R11 =  cO cw - sO sw ci     R12 = -cO sw - sO cw ci     R13 =  sO si
        R21 =  sO cw + cO sw ci     R22 = -sO sw + cO cw ci     R23 = -cO si
        R31 =  sw si                R32 =  cw si                R33 =  ci

    Parameters
    ----------
    raan : float
        Longitude of the ascending node (rad).
    inc : float
        Inclination to the ecliptic (rad).
    arg_perihelion : float
        Argument of perihelion (rad).

    Returns
    -------
    np.ndarray
        3x3 rotation matrix.
    """
    cO, sO = np.cos(raan), np.sin(raan)
    ci, si = np.cos(inc), np.sin(inc)
    cw, sw = np.cos(arg_perihelion), np.sin(arg_perihelion)

    return np.array([
        [cO * cw - sO * sw * ci, -cO * sw - sO * cw * ci,  sO * si],
        [sO * cw + cO * sw * ci, -sO * sw + cO * cw * ci, -cO * si],
        [sw * si,                 cw * si,                  ci],
    ], dtype=np.float64)


def perifocal_to_ecliptic(points_pqw: np.ndarray, rotation: np.ndarray) -> np.ndarray:
    """
    Rotate one point (shape (3,)) or a batch of points (shape (n, 3)) from
    the perifocal frame into the ecliptic frame with a precomputed matrix.

    Parameters
    ----------
    points_pqw : np.ndarray
        Perifocal coordinates (AU).
    rotation : np.ndarray
        3x3 matrix from :func:`perifocal_rotation`.

    Returns
    -------
    np.ndarray
        Ecliptic coordinates with the same shape as the input.
    """
    pts = np.asarray(points_pqw, dtype=np.float64)
    return pts @ rotation.T
