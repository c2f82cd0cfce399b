import math

import pytest

from conftest import make_body, make_model
from orrery.core.config import OrbitCfg
from orrery.core.logging_utils import RunLogger
from orrery.core.model import TWO_PI, Body


def _distance(p, q):
    return math.hypot(p[0] - q[0], p[1] - q[1])


def test_circular_orbit_returns_after_one_period():
    body = make_body(a=1.0, e=0.0, period=2.0)
    model = make_model([body])
    start = model.advance(body, 0.0)
    for _ in range(20):
        position = model.advance(body, 0.1)
        assert math.hypot(*position) == pytest.approx(1.0)
    assert _distance(position, start) < 1e-9


def test_earth_like_orbit_returns_after_one_period():
    body = make_body(a=1.0, e=0.017, period=1.0)
    model = make_model([body])
    start_anomaly = body.mean_anomaly
    start = model.advance(body, 0.0)
    end = model.advance(body, 1.0)
    drift = abs(body.mean_anomaly - start_anomaly)
    assert min(drift, TWO_PI - drift) < 1e-9
    assert _distance(end, start) < 1e-9


def test_perihelion_and_aphelion_positions():
    body = make_body(a=2.0, e=0.5, period=1.0)
    model = make_model([body])
    x, y = model.advance(body, 0.0)
    assert (x, y) == pytest.approx((1.0, 0.0))
    assert body.angle == pytest.approx(0.0)
    x, y = model.advance(body, 0.5)
    assert math.hypot(x, y) == pytest.approx(3.0)
    assert abs(body.angle) == pytest.approx(math.pi)


@pytest.mark.parametrize("delta", [0.0, 0.01, 0.5, 1.0, 7.3, 1e5, -0.2])
def test_mean_anomaly_stays_normalized(delta):
    body = make_body(a=1.0, e=0.2, period=0.24)
    model = make_model([body])
    for _ in range(5):
        model.advance(body, delta)
        assert 0.0 <= body.mean_anomaly < TWO_PI


def test_time_scale_slows_phase():
    body = make_body(period=1.0)
    model = make_model([body], OrbitCfg(time_scale=0.1, randomize_phase=False))
    model.advance(body, 1.0)
    assert body.mean_anomaly == pytest.approx(0.1 * TWO_PI)


def test_advance_all_moves_every_body_and_time():
    bodies = [make_body(name="a", period=1.0), make_body(name="b", period=2.0)]
    model = make_model(bodies)
    positions = model.advance_all(0.25)
    assert len(positions) == 2
    assert bodies[0].mean_anomaly == pytest.approx(TWO_PI / 4)
    assert bodies[1].mean_anomaly == pytest.approx(TWO_PI / 8)
    assert model.state.time == pytest.approx(0.25)


def test_initialize_without_randomizing_zeroes_phase():
    bodies = [make_body(name="a"), make_body(name="b")]
    for body in bodies:
        body.mean_anomaly = 1.0
    model = make_model(bodies)
    assert model.initialize(False) is None
    assert all(body.mean_anomaly == 0.0 for body in bodies)


def test_initialize_with_seed_is_reproducible():
    first = [make_body(name=str(i)) for i in range(5)]
    second = [make_body(name=str(i)) for i in range(5)]
    assert make_model(first).initialize(True, seed=42) == 42
    make_model(second).initialize(True, seed=42)
    assert [b.mean_anomaly for b in first] == [b.mean_anomaly for b in second]
    assert all(0.0 <= b.mean_anomaly < TWO_PI for b in first)
    assert len({b.mean_anomaly for b in first}) == 5


def test_initialize_without_seed_uses_clock():
    model = make_model([make_body()])
    assert isinstance(model.initialize(True), int)


def test_independent_simulations_do_not_share_state():
    body_a = make_body()
    body_b = make_body()
    model_a = make_model([body_a])
    model_b = make_model([body_b])
    model_a.advance(body_a, 0.3)
    assert body_b.mean_anomaly == 0.0
    assert model_b.state.stats.solves == 0
    assert model_a.state.stats.solves == 1


def test_orbit_path_is_pure_and_cached():
    body = make_body(a=2.0, e=0.3)
    model = make_model([body])
    model.advance(body, 0.37)
    anomaly = body.mean_anomaly
    first = model.orbit_path(body)
    second = model.orbit_path(body)
    assert first == second
    assert first is not second
    assert body.mean_anomaly == anomaly
    assert len(model.orbit_path(body, 16)) == 17


def test_orbit_path_follows_each_temporary_body():
    model = make_model([])
    for i in range(50):
        a = 1.0 + i
        path = model.orbit_path(make_body(a=a, e=0.0))
        assert math.hypot(*path[0]) == pytest.approx(a)


def test_bodies_with_equal_shape_share_a_path():
    model = make_model([])
    first = model.orbit_path(make_body(a=2.0, e=0.1, name="x"))
    second = model.orbit_path(make_body(a=2.0, e=0.1, name="y", period=9.0))
    assert first == second


def test_nonconvergence_is_counted_and_logged(tmp_path):
    cfg = OrbitCfg(time_scale=1.0, kepler_max_iterations=1, kepler_tolerance=1e-12, randomize_phase=False)
    body = make_body(a=1.0, e=0.9, period=10.0, name="comet")
    with RunLogger(tmp_path, run_id="solver") as run_logger:
        model = make_model([body], cfg, run_logger=run_logger)
        model.advance(body, 0.3)
    assert model.state.stats.solves == 1
    assert model.state.stats.nonconverged == 1
    assert body.solver_iterations == 1
    lines = run_logger.events_path.read_text().splitlines()
    assert lines[0] == "t,type,body,details"
    assert lines[1].split(",")[1:3] == ["solver_nonconverged", "comet"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"semi_major_axis": 0.0},
        {"semi_major_axis": -1.0},
        {"eccentricity": 1.0},
        {"eccentricity": -0.1},
        {"orbital_period": 0.0},
        {"visual_radius": 0.0},
        {"color": (1.2, 0.0, 0.0)},
    ],
)
def test_body_rejects_degenerate_parameters(kwargs):
    params = dict(
        semi_major_axis=1.0,
        eccentricity=0.1,
        orbital_period=1.0,
        visual_radius=0.02,
        color=(1.0, 1.0, 1.0),
    )
    params.update(kwargs)
    with pytest.raises(ValueError):
        Body(**params)


def test_body_bounds():
    body = make_body(a=2.0, e=0.25)
    assert body.perihelion == pytest.approx(1.5)
    assert body.aphelion == pytest.approx(2.5)


@pytest.mark.parametrize(
    "field, value",
    [
        ("semi_major_axis", 3.0),
        ("eccentricity", 0.2),
        ("orbital_period", 2.0),
        ("visual_radius", 0.5),
        ("color", (0.0, 0.0, 0.0)),
    ],
)
def test_orbit_shape_is_fixed_after_construction(field, value):
    body = make_body(a=2.0, e=0.1)
    with pytest.raises(AttributeError):
        setattr(body, field, value)


def test_phase_stays_writable():
    body = make_body()
    body.mean_anomaly = 1.0
    body.angle = 0.5
    body.name = "renamed"
    assert (body.mean_anomaly, body.angle, body.label) == (1.0, 0.5, "renamed")
