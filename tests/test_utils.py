"""Tests for metrics and plotting helpers."""

import numpy as np
import pytest

from heatsim.models.materials import MATERIALS, COPPER, IRON
from heatsim.models.pde_1d_model import HeatEquation1D
from heatsim.models.pde_2d_model import HeatEquation2D
from heatsim.utils.metrics import (
    temperature_rise, max_rise, progress, simulation_summary, compute_all_metrics
)
from heatsim.utils.plotting import (
    auto_range, shared_rise_range, plot_1d_heatmap, plot_1d_profiles,
    plot_2d_snapshots, plot_material_grid
)


def bar(material=COPPER, n=21):
    return HeatEquation1D(material, L=1.0, tmax=16.0, u0=13.0, f=80.0, n=n)


def plate(material=COPPER, n=7):
    return HeatEquation2D(material, L=1.0, tmax=16.0, u0=13.0, f=80.0, n=n)


# ===================== Metrics =====================

class TestMetrics:
    def test_temperature_rise(self):
        dT = temperature_rise([300.0, 310.0], 300.0)
        np.testing.assert_allclose(dT, [0.0, 10.0])

    def test_max_rise_never_negative(self):
        assert max_rise([290.0, 295.0], 300.0) == 0.0
        assert max_rise([290.0, 305.0], 300.0) == pytest.approx(5.0)

    def test_progress(self):
        model = bar()
        assert progress(model) == 0.0
        for _ in range(500):
            model.step()
        assert progress(model) == pytest.approx(0.5)

    def test_summary_fresh_model(self):
        model = bar(IRON)
        s = simulation_summary(model)
        assert s['material'] == 'Iron'
        assert s['alpha'] == pytest.approx(IRON.alpha())
        assert s['time'] == 0.0
        assert s['tmax'] == 16.0
        assert s['progress'] == 0.0
        assert s['L'] == 1.0
        assert s['u0'] == pytest.approx(286.15)
        assert s['T_max'] == pytest.approx(286.15)
        assert s['dT_max'] == 0.0

    def test_summary_after_heating(self):
        model = plate()
        for _ in range(10):
            model.step()
        s = simulation_summary(model)
        assert s['dT_max'] > 0.0
        assert s['T_max'] == pytest.approx(s['u0'] + s['dT_max'])
        assert s['T_mean'] <= s['T_max']

    def test_compute_all_metrics(self):
        metrics = compute_all_metrics([bar(m) for m in MATERIALS])
        assert list(metrics) == ['Copper', 'Iron', 'Glass', 'Polystyrene']


# ===================== Colour ranges =====================

class TestRanges:
    def test_auto_range_margin(self):
        vmin, vmax = auto_range(np.array([0.0, 20.0]))
        assert vmin == pytest.approx(-1.0)
        assert vmax == pytest.approx(21.0)

    def test_auto_range_uniform_field(self):
        vmin, vmax = auto_range(np.full(5, 300.0))
        assert vmin == pytest.approx(299.5)
        assert vmax == pytest.approx(300.5)

    def test_shared_rise_range_before_heating(self):
        assert shared_rise_range([bar(m) for m in MATERIALS]) == (0.0, 1.0)

    def test_shared_rise_range_after_heating(self):
        models = [bar(m) for m in MATERIALS]
        for m in models:
            for _ in range(50):
                m.step()
        dT = max(max_rise(m.get_temperature(), m.u0_kelvin) for m in models)
        vmin, vmax = shared_rise_range(models)
        assert vmin == 0.0
        assert vmax == pytest.approx(dT * 1.05)


# ===================== Figures =====================

class TestPlotting:
    def test_1d_figures(self, tmp_path):
        model = bar()
        t, T_field = model.simulate(save_every=100)
        plot_1d_heatmap(t, model.x, T_field, save_path=tmp_path / "heat.png")
        plot_1d_profiles(model.x, T_field[:, ::5], t[::5],
                         save_path=tmp_path / "profiles.png")
        assert (tmp_path / "heat.png").exists()
        assert (tmp_path / "profiles.png").exists()

    def test_2d_snapshots(self, tmp_path):
        model = plate()
        t, T_field = model.simulate(save_every=250)
        plot_2d_snapshots(model.x, model.y, T_field, [0.0, 8.0, 16.0], t,
                          save_path=tmp_path / "snaps.png")
        assert (tmp_path / "snaps.png").exists()

    @pytest.mark.parametrize("factory", [bar, plate])
    def test_material_grid(self, factory, tmp_path):
        models = [factory(m) for m in MATERIALS]
        for m in models:
            for _ in range(5):
                m.step()
        path = tmp_path / "grid.png"
        plot_material_grid(models, save_path=path)
        assert path.exists()

    def test_material_grid_fewer_models(self, tmp_path):
        path = tmp_path / "grid_one.png"
        plot_material_grid([bar()], save_path=path)
        assert path.exists()
