"""Tests for rotations between named reference systems."""

import itertools

import jax
import jax.numpy as jnp
import pytest

from topojax.constants import OBLIQUITY_J2000, RADSEC, T2000
from topojax.frames import (
    EpochKind,
    ReferenceSystem,
    frame_rotation,
    rotation_equatorial_to_ecliptic,
    rotation_nutation,
    rotation_precession,
)
from topojax.nutation import obleq
from topojax.rotations import Rx

MJD = 57028.479297592596

SYSTEMS = list(ReferenceSystem)
EPOCHS = list(EpochKind)


def _assert_rotation(r):
    assert r.shape == (3, 3)
    assert jnp.allclose(r @ r.T, jnp.eye(3), atol=1e-13)
    assert float(jnp.linalg.det(r)) == pytest.approx(1.0, abs=1e-13)


class TestElementaryFrames:
    def test_precession_identity_at_j2000(self):
        assert jnp.allclose(rotation_precession(T2000), jnp.eye(3), atol=1e-15)

    def test_precession_pole_angle(self):
        """The mean pole moves by theta ~ 2004.31 arcsec per century."""
        p = rotation_precession(T2000 + 36525.0)
        theta = (-0.041833 - 0.42665 + 2004.3109) * RADSEC
        assert float(p[2, 2]) == pytest.approx(float(jnp.cos(theta)), abs=1e-15)

    def test_precession_orthonormal(self):
        _assert_rotation(rotation_precession(MJD))

    def test_nutation_orthonormal(self):
        _assert_rotation(rotation_nutation(MJD))

    def test_nutation_is_small(self):
        """Nutation angles are tens of arcseconds."""
        n = rotation_nutation(MJD)
        assert float(jnp.max(jnp.abs(n - jnp.eye(3)))) < 1e-4

    def test_equatorial_to_ecliptic_pole(self):
        """The celestial pole seen from the ecliptic frame is tilted by eps towards +y."""
        eps = OBLIQUITY_J2000 * RADSEC
        pole = rotation_equatorial_to_ecliptic(T2000) @ jnp.array([0.0, 0.0, 1.0])
        assert jnp.allclose(pole, jnp.array([0.0, jnp.sin(eps), jnp.cos(eps)]), atol=1e-15)


class TestFrameRotation:
    def test_identity_same_system(self):
        for system, epoch in itertools.product(SYSTEMS, EPOCHS):
            r = frame_rotation(system, epoch, system, epoch, MJD)
            assert jnp.allclose(r, jnp.eye(3), atol=1e-14)

    @pytest.mark.parametrize(
        "src, tgt",
        list(itertools.product(itertools.product(SYSTEMS, EPOCHS), repeat=2)),
    )
    def test_all_pairs_orthonormal_and_invertible(self, src, tgt):
        forward = frame_rotation(src[0], src[1], tgt[0], tgt[1], MJD)
        backward = frame_rotation(tgt[0], tgt[1], src[0], src[1], MJD)
        _assert_rotation(forward)
        assert jnp.allclose(backward @ forward, jnp.eye(3), atol=1e-13)

    def test_equm_j2000_to_eclm_j2000(self):
        r = frame_rotation("EQUM", "J2000", "ECLM", "J2000", MJD)
        assert jnp.allclose(r, Rx(OBLIQUITY_J2000 * RADSEC), atol=1e-15)

    def test_precession_between_epochs(self):
        r = frame_rotation("EQUM", "J2000", "EQUM", "OFDATE", MJD)
        assert jnp.allclose(r, rotation_precession(MJD), atol=1e-15)

    def test_true_of_date_to_ecliptic_j2000_chain(self):
        """EQUT(date) -> EQUM(date) -> EQUM(J2000) -> ECLM(J2000)."""
        expected = (
            Rx(obleq(T2000))
            @ rotation_precession(MJD).T
            @ rotation_nutation(MJD).T
        )
        r = frame_rotation(ReferenceSystem.EQUT, EpochKind.OFDATE, ReferenceSystem.ECLM, EpochKind.J2000, MJD)
        assert jnp.allclose(r, expected, atol=1e-15)

    def test_composition(self):
        """Going through an intermediate system matches the direct rotation."""
        a = frame_rotation("EQUT", "OFDATE", "EQUM", "J2000", MJD)
        b = frame_rotation("EQUM", "J2000", "ECLM", "OFDATE", MJD)
        direct = frame_rotation("EQUT", "OFDATE", "ECLM", "OFDATE", MJD)
        assert jnp.allclose(b @ a, direct, atol=1e-13)

    def test_lowercase_names(self):
        upper = frame_rotation("EQUT", "OFDATE", "ECLM", "J2000", MJD)
        lower = frame_rotation("equt", "ofdate", "eclm", "j2000", MJD)
        assert jnp.allclose(upper, lower)

    def test_unknown_system_raises(self):
        with pytest.raises(ValueError, match="Unknown ReferenceSystem"):
            frame_rotation("GCRF", "J2000", "ECLM", "J2000", MJD)

    def test_unknown_epoch_raises(self):
        with pytest.raises(ValueError, match="Unknown EpochKind"):
            frame_rotation("EQUM", "B1950", "ECLM", "J2000", MJD)

    def test_jit(self):
        f = jax.jit(lambda m: frame_rotation("EQUT", "OFDATE", "ECLM", "J2000", m))
        assert jnp.allclose(f(MJD), frame_rotation("EQUT", "OFDATE", "ECLM", "J2000", MJD), atol=1e-15)
