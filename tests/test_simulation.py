import logging

import numpy as np
import pytest

from eulergrav import (
    Body,
    DegenerateVectorError,
    Force,
    NonFiniteStateError,
    Simulation,
    Universe,
)


def _three_bodies():
    return [
        Body(5.0, (0.0, 0.0, 0.0), (0.0, 0.1, 0.0)),
        Body(3.0, (4.0, 0.0, 0.0), (0.0, -0.2, 0.0)),
        Body(2.0, (0.0, 3.0, 1.0), (0.3, 0.0, 0.0)),
    ]


def test_step_matches_two_pass_loop() -> None:
    universe = Universe(gravity_constant=1.0, time_step=0.05)
    manual = _three_bodies()
    sim = Simulation(_three_bodies(), universe)

    for _ in range(10):
        for body in manual:
            body.update_velocity(manual, 0.05, gravity_constant=1.0)
        for body in manual:
            body.update_position(0.05)
    sim.run(10)

    assert sim.steps_taken == 10
    for expected, actual in zip(manual, sim.bodies):
        np.testing.assert_allclose(actual.position, expected.position, rtol=1e-12)
        np.testing.assert_allclose(actual.velocity, expected.velocity, rtol=1e-12)


def test_velocity_pass_uses_pre_step_positions() -> None:
    a = Body(1.0, (0.0, 0.0, 0.0), (100.0, 0.0, 0.0))
    b = Body(1.0, (10.0, 0.0, 0.0))
    sim = Simulation([a, b], Universe(gravity_constant=1.0))

    sim.step(1.0)

    # both pulls evaluated at separation 10 even though a moves first in the list
    np.testing.assert_allclose(a.velocity, [100.0 + 0.01, 0.0, 0.0])
    np.testing.assert_allclose(b.velocity, [-0.01, 0.0, 0.0])
    np.testing.assert_allclose(a.position, [100.01, 0.0, 0.0])
    np.testing.assert_allclose(b.position, [9.99, 0.0, 0.0])


def test_default_dt_comes_from_universe() -> None:
    body = Body(1.0, (0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
    sim = Simulation([body], Universe(time_step=0.25))
    sim.step()
    np.testing.assert_allclose(body.position, [0.25, 0.0, 0.0])


def test_universes_are_isolated() -> None:
    shared = Universe(gravity_constant=1.0)
    sim_a = Simulation([Body(1.0), Body(1.0, (1.0, 0.0, 0.0))], shared)
    sim_b = Simulation([Body(1.0), Body(1.0, (1.0, 0.0, 0.0))], shared)

    shared.gravity_constant = 100.0
    sim_b.universe.gravity_constant = 0.0
    sim_a.step(1.0)
    sim_b.step(1.0)

    np.testing.assert_allclose(sim_a.body(0).velocity, [1.0, 0.0, 0.0])
    np.testing.assert_array_equal(sim_b.body(0).velocity, [0.0, 0.0, 0.0])


def test_handles_and_duplicates() -> None:
    sim = Simulation()
    a = Body(1.0)
    twin = Body(1.0)
    assert sim.add_body(a) == 0
    assert sim.add_body(twin) == 1
    assert sim.body(1) is twin
    assert sim.n_bodies == 2
    with pytest.raises(ValueError):
        sim.add_body(a)
    with pytest.raises(IndexError):
        sim.body(2)


def test_coincident_bodies_raise() -> None:
    sim = Simulation([Body(1.0, (1.0, 1.0, 1.0)), Body(2.0, (1.0, 1.0, 1.0))])
    with pytest.raises(DegenerateVectorError):
        sim.step()


def test_run_rejects_negative_steps() -> None:
    with pytest.raises(ValueError):
        Simulation().run(-1)


def test_runtime_guard(caplog) -> None:
    body = Body(1.0)
    body.add_force(Force((1.0, 0.0, 0.0), float("inf")))
    sim = Simulation([body], Universe(enable_runtime_guard=True))

    with caplog.at_level(logging.WARNING, logger="eulergrav.validation"):
        with pytest.raises(NonFiniteStateError):
            sim.step(1.0)
    assert "[invalid]" in caplog.text


def test_runtime_guard_off_lets_state_through() -> None:
    body = Body(1.0)
    body.add_force(Force((1.0, 0.0, 0.0), float("inf")))
    sim = Simulation([body])
    sim.step(1.0)
    assert np.isinf(body.velocity[0])


def test_fast_mode_uses_single_precision() -> None:
    sim = Simulation(_three_bodies(), Universe(gravity_constant=1.0, fast_float32=True))
    assert all(b.position.dtype == np.float32 for b in sim.bodies)

    sim.run(5)
    assert all(b.velocity.dtype == np.float32 for b in sim.bodies)

    late = Body(1.0, (50.0, 50.0, 50.0))
    sim.add_body(late)
    assert late.position.dtype == np.float32

    sim.set_fast_mode(False)
    assert all(b.position.dtype == np.float64 for b in sim.bodies)
    assert sim.universe.fast_float32 is False


def test_diagnostics() -> None:
    sim = Simulation([
        Body(1.0, (0.0, 0.0, 0.0), (1.0, 0.0, 0.0)),
        Body(3.0, (4.0, 0.0, 0.0), (0.0, 2.0, 0.0)),
    ])
    np.testing.assert_allclose(sim.center_of_mass(), [3.0, 0.0, 0.0])
    np.testing.assert_allclose(sim.total_momentum(), [1.0, 6.0, 0.0])
    np.testing.assert_allclose(sim.center_of_mass_velocity(), [0.25, 1.5, 0.0])
    assert sim.kinetic_energy() == pytest.approx(0.5 * 1.0 * 1.0 + 0.5 * 3.0 * 4.0)

    sim.remove_center_of_mass_velocity()
    np.testing.assert_allclose(sim.total_momentum(), [0.0, 0.0, 0.0], atol=1e-12)


def test_diagnostics_empty_and_massless() -> None:
    empty = Simulation()
    np.testing.assert_array_equal(empty.center_of_mass(), [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(empty.total_momentum(), [0.0, 0.0, 0.0])
    assert empty.kinetic_energy() == 0.0

    ghosts = Simulation([Body(0.0, (2.0, 0.0, 0.0)), Body(0.0, (4.0, 0.0, 0.0))])
    np.testing.assert_allclose(ghosts.center_of_mass(), [3.0, 0.0, 0.0])
    np.testing.assert_array_equal(ghosts.center_of_mass_velocity(), [0.0, 0.0, 0.0])


def test_snapshot_restore_round_trip() -> None:
    push = Force((0.0, 0.0, 1.0), 1.0)
    bodies = _three_bodies()
    bodies[0].add_force(push)
    sim = Simulation(bodies, Universe(gravity_constant=1.0))
    state = sim.snapshot()

    sim.run(20, dt=0.05)
    sim.restore(state)

    assert sim.steps_taken == 0
    np.testing.assert_array_equal(sim.positions(), state["positions"])
    np.testing.assert_array_equal(sim.velocities(), state["velocities"])
    assert sim.body(0).forces == (push,)


def test_restore_rejects_mismatched_snapshot() -> None:
    sim = Simulation(_three_bodies())
    other = Simulation([Body(1.0)])
    with pytest.raises(ValueError):
        sim.restore(other.snapshot())


def test_failed_step_leaves_state_untouched() -> None:
    a = Body(1.0, (0.0, 0.0, 0.0))
    b = Body(1.0, (10.0, 0.0, 0.0))
    c = Body(1.0, (10.0, 0.0, 0.0))
    sim = Simulation([a, b, c], Universe(gravity_constant=1.0))
    before = sim.snapshot()

    with pytest.raises(DegenerateVectorError):
        sim.step(1.0)

    assert sim.steps_taken == 0
    np.testing.assert_array_equal(a.velocity, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(sim.velocities(), before["velocities"])
    np.testing.assert_array_equal(sim.positions(), before["positions"])
