import jax
import jax.numpy as jnp
import pytest

from topojax.config import set_dtype
from topojax.eop import EOPExtrapolation, static_eop, zero_eop
from topojax.epoch import Epoch
from topojax.errors import TimeResolutionError
from topojax.time import TimeSystem


# ──────────────────────────────────────────────
# Construction
# ──────────────────────────────────────────────


class TestEpochConstruction:
    def test_default_scale_is_utc(self):
        epc = Epoch(57028.5)
        assert epc.time_system == TimeSystem.UTC
        assert float(epc.mjd()) == 57028.5

    def test_explicit_scale(self):
        epc = Epoch(57028.5, TimeSystem.TT)
        assert epc.time_system == TimeSystem.TT

    def test_invalid_scale_raises(self):
        with pytest.raises(ValueError, match="Unknown time system"):
            Epoch(57028.5, "UTC")

    def test_from_caldate(self):
        epc = Epoch.from_caldate(2000, 1, 1, 12, 0, 0.0)
        assert float(epc.mjd()) == pytest.approx(51544.5, abs=1e-9)
        assert epc.time_system == TimeSystem.UTC

    def test_from_caldate_with_scale(self):
        epc = Epoch.from_caldate(2015, 1, 7, time_system=TimeSystem.UT1)
        assert epc.time_system == TimeSystem.UT1
        assert float(epc.mjd()) == pytest.approx(57029.0, abs=1e-9)

    def test_caldate_roundtrip(self):
        epc = Epoch.from_caldate(2024, 3, 15, 6, 30, 45.0)
        year, month, day, hour, minute, second = epc.caldate()
        assert (year, month, day, hour, minute) == (2024, 3, 15, 6, 30)
        assert second == pytest.approx(45.0, abs=1e-3)


# ──────────────────────────────────────────────
# Scale conversions
# ──────────────────────────────────────────────


class TestEpochConversions:
    def test_utc_to_tt(self):
        utc = Epoch(57028.5)
        tt = utc.to_tt()
        assert tt.time_system == TimeSystem.TT
        # TAI-UTC = 35 s in January 2015
        assert float((tt.mjd() - utc.mjd()) * 86400.0) == pytest.approx(67.184, abs=1e-5)

    def test_tt_to_utc(self):
        tt = Epoch(57028.5, TimeSystem.TT)
        utc = tt.to_utc()
        assert utc.time_system == TimeSystem.UTC
        assert float((tt.mjd() - utc.mjd()) * 86400.0) == pytest.approx(67.184, abs=1e-5)

    def test_same_scale_returns_self(self):
        epc = Epoch(57028.5)
        assert epc.to_utc() is epc
        tt = Epoch(57028.5, TimeSystem.TT)
        assert tt.to_tt() is tt

    def test_utc_to_ut1(self):
        eop = static_eop(ut1_utc=-0.4)
        ut1 = Epoch(57028.5).to_ut1(eop)
        assert ut1.time_system == TimeSystem.UT1
        assert float((ut1.mjd() - 57028.5) * 86400.0) == pytest.approx(-0.4, abs=1e-5)

    def test_tt_to_ut1(self):
        eop = static_eop(ut1_utc=0.0)
        tt = Epoch(57028.5, TimeSystem.TT)
        ut1 = tt.to_ut1(eop)
        assert float((tt.mjd() - ut1.mjd()) * 86400.0) == pytest.approx(67.184, abs=1e-5)

    def test_ut1_to_utc(self):
        eop = static_eop(ut1_utc=-0.4)
        utc = Epoch(57028.5, TimeSystem.UT1).to_utc(eop)
        assert float((utc.mjd() - 57028.5) * 86400.0) == pytest.approx(0.4, abs=1e-5)

    def test_tt_to_utc_across_leap_second(self):
        # 43 s after 0h TT on 2015-07-01 is still 2015-06-30 in UTC, before
        # the leap second that raised TAI-UTC from 35 s to 36 s
        tt = Epoch(57204.0 + 43.0 / 86400.0, TimeSystem.TT)
        day, seconds = tt.to_utc().day_seconds()
        assert int(day) == 57203
        assert float(seconds) == pytest.approx(86400.0 + 43.0 - 67.184, abs=1e-6)
        assert tt.to_utc().to_tt() == tt

    def test_ut1_to_utc_requires_eop(self):
        with pytest.raises(ValueError, match="requires EOP data"):
            Epoch(57028.5, TimeSystem.UT1).to_utc()

    def test_to_ut1_out_of_range_raises(self):
        eop = static_eop(ut1_utc=0.1, mjd_min=50000.0, mjd_max=51000.0)
        with pytest.raises(TimeResolutionError):
            Epoch(57028.5).to_ut1(eop, EOPExtrapolation.ERROR)


# ──────────────────────────────────────────────
# Arithmetic and comparison
# ──────────────────────────────────────────────


class TestEpochArithmetic:
    def test_add_seconds(self):
        epc = Epoch(57028.5) + 86400.0
        assert float(epc.mjd()) == pytest.approx(57029.5, abs=1e-9)

    def test_subtract_seconds(self):
        epc = Epoch(57028.5) - 43200.0
        assert float(epc.mjd()) == pytest.approx(57028.0, abs=1e-9)
        assert epc.time_system == TimeSystem.UTC

    def test_difference_in_seconds(self):
        dt = Epoch(57028.5) - Epoch(57028.0)
        assert float(dt) == pytest.approx(43200.0, abs=1e-5)

    def test_difference_across_scales_raises(self):
        with pytest.raises(ValueError, match="different time scales"):
            Epoch(57028.5) - Epoch(57028.5, TimeSystem.TT)

    def test_add_preserves_scale(self):
        epc = Epoch(57028.5, TimeSystem.TT) + 10.0
        assert epc.time_system == TimeSystem.TT


class TestEpochComparison:
    def test_equal(self):
        assert Epoch(57028.5) == Epoch(57028.5)

    def test_not_equal(self):
        assert Epoch(57028.5) != Epoch(57028.6)

    def test_ordering(self):
        assert Epoch(57028.0) < Epoch(57028.5)
        assert Epoch(57029.0) > Epoch(57028.5)

    def test_compare_across_scales_raises(self):
        with pytest.raises(ValueError):
            Epoch(57028.5) < Epoch(57028.5, TimeSystem.TT)

    def test_hash_matches_equal_epochs(self):
        assert hash(Epoch(57028.5)) == hash(Epoch(57028.5))
        assert hash(Epoch(57028.5)) != hash(Epoch(57028.5, TimeSystem.TT))


class TestEpochDisplay:
    def test_str(self):
        assert str(Epoch(57028.5)) == "2015-01-06T12:00:00.000 UTC"

    def test_str_tt(self):
        assert str(Epoch(51544.5, TimeSystem.TT)).endswith(" TT")

    def test_repr(self):
        assert repr(Epoch(57028.5)) == "Epoch(mjd=57028.5, time_system=TimeSystem.UTC)"


# ──────────────────────────────────────────────
# JAX transformations
# ──────────────────────────────────────────────


class TestEpochJAX:
    def test_pytree_roundtrip(self):
        epc = Epoch(57028.5, TimeSystem.TT)
        leaves, treedef = jax.tree_util.tree_flatten(epc)
        assert len(leaves) == 3
        rebuilt = jax.tree_util.tree_unflatten(treedef, leaves)
        assert rebuilt.time_system == TimeSystem.TT
        assert float(rebuilt.mjd()) == 57028.5

    def test_jit_through_epoch(self):
        @jax.jit
        def shift(epc):
            return (epc + 60.0).mjd()

        result = shift(Epoch(57028.5))
        assert float(result) == pytest.approx(57028.5 + 60.0 / 86400.0, abs=1e-10)

    def test_jit_scale_conversion(self):
        f = jax.jit(lambda e: e.to_tt().mjd())
        assert float(f(Epoch(57028.5))) == pytest.approx(float(Epoch(57028.5).to_tt().mjd()))

    def test_vmap_over_epochs(self):
        mjds = jnp.array([57028.0, 57028.5, 57029.0])
        result = jax.vmap(lambda m: (Epoch(m) + 3600.0).mjd())(mjds)
        assert jnp.allclose(result, mjds + 3600.0 / 86400.0)

    def test_day_seconds(self):
        day, seconds = Epoch(57028.75).day_seconds()
        assert day.dtype == jnp.int32
        assert int(day) == 57028
        assert float(seconds) == pytest.approx(64800.0, abs=1e-9)

    def test_scan_accumulates_steps(self):
        epc = jax.lax.fori_loop(0, 100, lambda i, e: e + 0.1, Epoch(57028.5))
        assert float(epc - Epoch(57028.5)) == pytest.approx(10.0, abs=1e-9)


class TestEpochSinglePrecision:
    """Second-level shifts must not be lost to a float32 MJD."""

    MJD = 57028.479297592596

    @pytest.fixture(autouse=True)
    def float32(self):
        set_dtype(jnp.float32)
        yield
        set_dtype(jnp.float64)

    def test_seconds_stored_in_float32(self):
        _, seconds = Epoch(self.MJD).day_seconds()
        assert seconds.dtype == jnp.float32

    def test_add_one_minute(self):
        epc = Epoch(self.MJD)
        assert float((epc + 60.0) - epc) == pytest.approx(60.0, abs=1e-2)

    def test_utc_to_tt_offset(self):
        utc = Epoch(self.MJD)
        tt = utc.to_tt()
        utc_day, utc_seconds = utc.day_seconds()
        tt_day, tt_seconds = tt.day_seconds()
        shift = (int(tt_day) - int(utc_day)) * 86400.0 + float(tt_seconds) - float(utc_seconds)
        assert shift == pytest.approx(67.184, abs=1e-2)

    def test_tt_roundtrip(self):
        utc = Epoch(self.MJD)
        assert utc.to_tt().to_utc() == utc

    def test_ut1_offset(self):
        utc = Epoch(self.MJD)
        ut1 = utc.to_ut1(static_eop(ut1_utc=-0.4644))
        assert float(ut1.to_utc(static_eop(ut1_utc=-0.4644)) - utc) == pytest.approx(0.0, abs=1e-2)
        _, utc_seconds = utc.day_seconds()
        _, ut1_seconds = ut1.day_seconds()
        assert float(ut1_seconds) - float(utc_seconds) == pytest.approx(-0.4644, abs=1e-2)

    def test_compensated_small_steps(self):
        start = Epoch(self.MJD)
        epc = jax.lax.fori_loop(0, 1000, lambda i, e: e + 0.1, start)
        assert float(epc - start) == pytest.approx(100.0, abs=2e-2)

    def test_caldate(self):
        epc = Epoch.from_caldate(2015, 1, 7, 11, 29, 42.307)
        year, month, day, hour, minute, second = epc.caldate()
        assert (year, month, day, hour, minute) == (2015, 1, 7, 11, 29)
        assert second == pytest.approx(42.307, abs=5e-3)

    def test_zero_eop_ut1_is_utc(self):
        utc = Epoch(self.MJD)
        assert float(utc.to_ut1(zero_eop()).to_utc(zero_eop()) - utc) == pytest.approx(0.0, abs=1e-2)
