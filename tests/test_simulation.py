import pytest

from kmeans_animation import (FINAL_MESSAGE, ConfigurationError, Simulation,
                              SimulationConfig, SimulationState)

from conftest import RecordingRenderer, four_point_run


def test_starts_clustering(small_config):
    sim = Simulation(small_config, random_state=0)
    assert sim.state is SimulationState.CLUSTERING
    assert len(sim.worklist) == small_config.point_count
    assert sim.clusters == [[] for _ in range(small_config.k)]


def test_invalid_config_fails_at_construction():
    config = SimulationConfig()
    config.k = 0
    with pytest.raises(ConfigurationError):
        Simulation(config)


def test_four_point_scenario(four_point_config):
    sim = Simulation(four_point_config, generator=four_point_run)
    assert four_point_config.batch_size == 1

    for _ in range(3):
        assert sim.tick() is SimulationState.CLUSTERING
    assert sim.tick() is SimulationState.REPOSITIONING

    left, right = sim.points[:2], sim.points[2:]
    assert {id(p) for p in sim.clusters[0]} == {id(p) for p in left}
    assert {id(p) for p in sim.clusters[1]} == {id(p) for p in right}
    c0, c1 = sim.centroids
    assert (c0.target_x, c0.target_y) == (0.0, 0.5)
    assert (c1.target_x, c1.target_y) == (10.0, 0.5)


def test_four_point_scenario_converges_on_column_means(four_point_config):
    sim = Simulation(four_point_config, generator=four_point_run)
    sim.run_until_final(max_ticks=500)
    assert [(c.x, c.y) for c in sim.centroids] == [(0.0, 0.5), (10.0, 0.5)]
    assert sim.context.passes == 2
    hues = [p.color.hue for p in sim.points]
    assert hues == [0.0, 0.0, 180.0, 180.0]


def test_partition_invariant_every_tick(small_config):
    sim = Simulation(small_config, random_state=3)
    all_ids = {id(p) for p in sim.points}
    for _ in range(5000):
        ids = [id(p) for p in sim.worklist] + [id(p) for c in sim.clusters for p in c]
        assert len(ids) == len(set(ids))
        if sim.state is SimulationState.CLUSTERING:
            assert set(ids) == all_ids
        if sim.tick() is SimulationState.FINAL:
            break
    assert sim.is_final


def test_final_is_terminal_without_reset(small_config):
    sim = Simulation(small_config, random_state=4)
    sim.run_until_final()
    positions = [(c.x, c.y) for c in sim.centroids]
    for _ in range(20):
        assert sim.tick() is SimulationState.FINAL
    assert [(c.x, c.y) for c in sim.centroids] == positions


def test_reset_ignored_while_running(small_config):
    sim = Simulation(small_config, random_state=5)
    assert sim.request_reset() is False
    sim.tick()
    assert sim.runs == 1


def test_reset_from_final_starts_a_fresh_run(small_config):
    sim = Simulation(small_config, random_state=6)
    sim.run_until_final()
    old_points = sim.points

    assert sim.request_reset() is True
    assert sim.state is SimulationState.FINAL

    assert sim.tick() is SimulationState.CLUSTERING
    assert sim.runs == 2
    assert sim.points is not old_points
    assert len(sim.points) == small_config.point_count
    assert len(sim.centroids) == small_config.k
    assert len(sim.worklist) == small_config.point_count
    assert all(c == [] for c in sim.clusters)
    assert all(c.at_target for c in sim.centroids)


def test_render_order_while_clustering(four_point_config):
    renderer = RecordingRenderer()
    sim = Simulation(four_point_config, renderer=renderer, generator=four_point_run)
    sim.tick()
    sim.tick()

    frame = renderer.calls[renderer.names().index('begin_frame', 1):]
    names = [c[0] for c in frame]
    assert names[0] == 'begin_frame' and names[-1] == 'end_frame'
    body = names[1:-1]
    n_lines = body.count('draw_line')
    assert n_lines == 2
    assert body == ['draw_line'] * n_lines + ['draw_centroid'] * 2 + ['draw_point'] * 4

    line_centroids = [c[1] for c in frame if c[0] == 'draw_line']
    order = [sim.centroids.index(c) for c in line_centroids]
    assert order == sorted(order)


def test_render_when_final(four_point_config):
    renderer = RecordingRenderer()
    sim = Simulation(four_point_config, renderer=renderer, generator=four_point_run)
    sim.run_until_final(max_ticks=500)

    renderer.calls.clear()
    sim.tick()
    assert renderer.names() == (['begin_frame'] + ['draw_point'] * 4
                                + ['draw_overlay_text', 'end_frame'])
    assert renderer.calls[-2][1] == FINAL_MESSAGE


def test_run_until_final_gives_up():
    config = SimulationConfig(point_count=300, k=3, batch_size=1)
    sim = Simulation(config, random_state=0)
    with pytest.raises(RuntimeError):
        sim.run_until_final(max_ticks=10)
