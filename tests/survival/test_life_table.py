"""
Tests for the derived columns: cumulative hazard, stratum labels, life table.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from pylifetable.core.exceptions import StratumMismatchError
from pylifetable.survival import (
    build_life_table,
    cumulative_hazard,
    label_strata,
    stratum_levels,
)
from pylifetable.survival._strata import label_blocks, time_resets


# ═══════════════════════════════════════════════════════════════════════
# Cumulative hazard
# ═══════════════════════════════════════════════════════════════════════


class TestCumulativeHazard:

    def test_negative_log(self):
        s = np.array([1.0, 0.8, 0.5, 0.1])
        assert_allclose(cumulative_hazard(s), -np.log(s), rtol=1e-15)

    def test_survival_one_is_positive_zero(self):
        h = cumulative_hazard([1.0])
        assert h[0] == 0.0
        assert not np.signbit(h[0])

    def test_survival_zero_is_inf(self):
        with np.errstate(all="raise"):
            h = cumulative_hazard([0.5, 0.0])
        assert np.isposinf(h[1])

    def test_nondecreasing_for_nonincreasing_survival(self):
        h = cumulative_hazard([1.0, 0.9, 0.9, 0.4, 0.0])
        assert np.all(np.diff(h) >= 0)


# ═══════════════════════════════════════════════════════════════════════
# Stratum labels
# ═══════════════════════════════════════════════════════════════════════


class TestStratumLevels:

    def test_first_appearance_order(self):
        levels = stratum_levels(["c", "a", "c", "b", "a"])
        assert_array_equal(levels, ["c", "a", "b"])

    def test_numeric(self):
        assert_array_equal(stratum_levels([3, 1, 3, 2]), [3, 1, 2])

    def test_empty(self):
        assert len(stratum_levels([])) == 0

    def test_mixed_type_object_labels(self):
        values = np.array(["b", 1, "b", 2.5, 1], dtype=object)
        levels = stratum_levels(values)
        assert levels.dtype == object
        assert levels.tolist() == ["b", 1, 2.5]


class TestLabelBlocks:

    def test_expand(self):
        labels = label_blocks([2, 1, 3], ["x", "y", "z"])
        assert_array_equal(labels, ["x", "x", "y", "z", "z", "z"])

    def test_count_mismatch(self):
        with pytest.raises(StratumMismatchError) as excinfo:
            label_blocks([2, 2], ["x", "y", "z"])
        assert excinfo.value.n_blocks == 2
        assert excinfo.value.n_levels == 3


class TestLabelStrata:
    """Positional reconstruction from time resets."""

    def test_time_resets(self):
        assert_array_equal(time_resets([1, 2, 5, 1, 3, 0.5]), [3, 5])

    def test_two_strata(self):
        labels = label_strata([1, 2, 3, 1, 2], ["treated", "control"])
        assert_array_equal(
            labels, ["treated", "treated", "treated", "control", "control"],
        )

    def test_contiguous_blocks(self):
        labels = label_strata([1, 4, 2, 3, 9, 0.5], ["a", "b", "c"])
        assert_array_equal(labels, ["a", "a", "b", "b", "b", "c"])

    def test_single_stratum(self):
        labels = label_strata([1, 2, 3], ["only"])
        assert_array_equal(labels, ["only"] * 3)

    def test_too_many_levels_raises(self):
        """A stratum starting above the previous one's last time is invisible."""
        with pytest.raises(StratumMismatchError, match="1 stratum blocks") as excinfo:
            label_strata([1, 2, 5, 7], ["a", "b"])
        assert excinfo.value.n_blocks == 1
        assert excinfo.value.n_levels == 2

    def test_too_few_levels_raises(self):
        with pytest.raises(StratumMismatchError):
            label_strata([1, 2, 1, 2, 1], ["a", "b"])

    def test_empty_table(self):
        assert len(label_strata([], [])) == 0
        with pytest.raises(StratumMismatchError):
            label_strata([], ["a"])


# ═══════════════════════════════════════════════════════════════════════
# Life table
# ═══════════════════════════════════════════════════════════════════════


class TestLifeTable:
    """Three events at t = 1, 2, 4 with S = 0.8, 0.6, 0.3."""

    TIME = np.array([1.0, 2.0, 4.0])
    SURV = np.array([0.8, 0.6, 0.3])
    EVENTS = np.array([1.0, 1.0, 1.0])

    def test_hazard(self):
        lt = build_life_table(self.TIME, self.SURV, self.EVENTS)
        expected = [np.log(1 / 0.8), np.log(0.8 / 0.6), np.log(0.6 / 0.3) / 2]
        assert_allclose(lt.hazard, expected, rtol=1e-12)

    def test_density(self):
        lt = build_life_table(self.TIME, self.SURV, self.EVENTS)
        assert_allclose(lt.density, [0.2, 0.2, 0.15], rtol=1e-12)

    def test_mid_int(self):
        lt = build_life_table(self.TIME, self.SURV, self.EVENTS)
        assert_allclose(lt.mid_int, [0.5, 1.5, 3.0])

    def test_life(self):
        """life = Σ dt (3 S - S_prev) / 2: 0.7, 0.7 + 0.5, 1.2 + 0.3."""
        lt = build_life_table(self.TIME, self.SURV, self.EVENTS)
        assert lt.life[0] == pytest.approx(1 * (3 * 0.8 - 1) / 2)
        assert_allclose(lt.life, [0.7, 1.2, 1.5], rtol=1e-12)

    def test_proplife(self):
        lt = build_life_table(self.TIME, self.SURV, self.EVENTS)
        assert_allclose(lt.proplife, [0.7, 0.6, 0.375], rtol=1e-12)

    def test_rows_without_events_are_nan(self):
        lt = build_life_table(
            [1.0, 1.5, 2.0, 4.0], [0.8, 0.8, 0.6, 0.3], [1.0, 0.0, 1.0, 1.0],
        )
        assert_array_equal(lt.event_rows, [True, False, True, True])
        for values in (lt.hazard, lt.density, lt.mid_int, lt.life, lt.proplife):
            assert np.isnan(values[1])
        # The censoring-only row does not shift the lags
        assert_allclose(lt.life[[0, 2, 3]], [0.7, 1.2, 1.5], rtol=1e-12)
        assert_allclose(lt.mid_int[[0, 2, 3]], [0.5, 1.5, 3.0])

    def test_lags_restart_per_stratum(self):
        lt = build_life_table(
            [1.0, 2.0, 1.0, 3.0], [0.5, 0.25, 0.8, 0.4], [1, 1, 1, 1],
            strata=["a", "a", "b", "b"],
        )
        assert lt.hazard[2] == pytest.approx(np.log(1 / 0.8))
        assert lt.mid_int[2] == pytest.approx(0.5)
        assert lt.life[2] == pytest.approx(0.7)
        assert lt.life[3] == pytest.approx(0.7 + 2 * (3 * 0.4 - 0.8) / 2)
        assert lt.mid_int[3] == pytest.approx(2.0)

    def test_stratum_without_events(self):
        lt = build_life_table(
            [1.0, 2.0, 1.0], [0.5, 0.5, 1.0], [1, 0, 0],
            strata=["a", "a", "b"],
        )
        assert np.isnan(lt.life[2])
        assert lt.life[0] == pytest.approx(1 * (1.5 - 1) / 2)


class TestLifeTableDegenerate:
    """inf/NaN propagate; nothing raises, nothing becomes 0."""

    def test_zero_width_interval(self):
        with np.errstate(all="raise"):
            lt = build_life_table([1.0, 1.0], [0.5, 0.25], [1, 1])
        assert not np.isfinite(lt.hazard[1])
        assert not np.isfinite(lt.density[1])
        assert lt.hazard[1] != 0
        assert lt.density[1] != 0

    def test_zero_width_same_survival(self):
        lt = build_life_table([1.0, 1.0], [0.5, 0.5], [1, 1])
        assert np.isnan(lt.hazard[1])
        assert np.isnan(lt.density[1])

    def test_event_at_time_zero(self):
        lt = build_life_table([0.0, 1.0], [0.9, 0.5], [1, 1])
        assert np.isposinf(lt.hazard[0])
        assert np.isnan(lt.proplife[0])
        assert np.isfinite(lt.proplife[1])

    def test_survival_reaches_zero(self):
        lt = build_life_table([1.0, 2.0], [0.5, 0.0], [1, 1])
        assert np.isposinf(lt.hazard[1])
        assert lt.density[1] == pytest.approx(0.5)
