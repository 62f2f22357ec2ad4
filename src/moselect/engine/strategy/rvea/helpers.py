"""
Support functions for RVEA.

This module contains:
- Cosine similarity between solutions and reference vectors
- Angle-penalized distance (APD)
- Reference vector adaptation to the objective ranges
"""

from __future__ import annotations

import numpy as np


def unit_vectors(V: np.ndarray) -> np.ndarray:
    """Rows of ``V`` scaled to unit length; zero rows stay zero."""
    V = np.asarray(V, dtype=float)
    norms = np.linalg.norm(V, axis=1, keepdims=True)
    return V / np.where(norms > 0, norms, 1.0)


def cosine_matrix(F: np.ndarray, V: np.ndarray) -> np.ndarray:
    """
    Cosine between every row of ``F`` and every reference vector.

    A zero objective vector (a solution at the ideal point) has cosine 1 with
    every reference vector.
    """
    F = np.asarray(F, dtype=float)
    norms = np.linalg.norm(F, axis=1)
    safe = np.where(norms > 0, norms, 1.0)
    cosine = (F / safe[:, None]) @ unit_vectors(V).T
    cosine[norms == 0] = 1.0
    return np.clip(cosine, -1.0, 1.0)


def minimum_angles(V: np.ndarray) -> np.ndarray:
    """Smallest angle between each reference vector and any other one."""
    U = unit_vectors(V)
    cosine = np.clip(U @ U.T, -1.0, 1.0)
    angles = np.arccos(cosine)
    np.fill_diagonal(angles, np.inf)
    return angles.min(axis=1) if len(U) > 1 else np.full(len(U), np.inf)


def angle_penalized_distance(
    F: np.ndarray,
    V: np.ndarray,
    progress: float,
    alpha: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Partition translated solutions among reference vectors and score them.

    Parameters
    ----------
    F : np.ndarray
        Objective values translated by the ideal point (minimization form).
    V : np.ndarray
        Reference vectors, shape (K, n_obj).
    progress : float
        ``generation / max_generations``.
    alpha : float
        Rate of change of the angle penalty.

    Returns
    -------
    assignment : np.ndarray
        Index of the reference vector with the largest cosine, per row.
    apd : np.ndarray
        ``(1 + M * progress**alpha * theta / gamma) * ||f||`` per row, where
        ``theta`` is the angle to the assigned vector and ``gamma`` the smallest
        angle between that vector and any other.
    """
    F = np.asarray(F, dtype=float)
    n_obj = F.shape[1]
    cosine = cosine_matrix(F, V)
    assignment = np.argmax(cosine, axis=1)
    theta = np.arccos(cosine[np.arange(F.shape[0]), assignment])
    gamma = minimum_angles(V)[assignment]
    ratio = np.zeros_like(theta)
    # A lone reference vector has no neighbour to measure against.
    ok = np.isfinite(gamma) & (gamma > 0)
    ratio[ok] = theta[ok] / gamma[ok]
    apd = (1.0 + n_obj * (progress**alpha) * ratio) * np.linalg.norm(F, axis=1)
    return assignment, apd


def adapt_reference_vectors(initial: np.ndarray, F: np.ndarray, *, floor: float = 1e-6) -> np.ndarray:
    """
    Scale the initial vectors by the per-objective range of ``F`` and normalize.

    Objectives with a zero range use ``floor`` as their component.
    """
    F = np.asarray(F, dtype=float)
    span = F.max(axis=0) - F.min(axis=0)
    scaled = np.where(span > 0, np.asarray(initial, dtype=float) * span, floor)
    return unit_vectors(scaled)


__all__ = [
    "unit_vectors",
    "cosine_matrix",
    "minimum_angles",
    "angle_penalized_distance",
    "adapt_reference_vectors",
]
