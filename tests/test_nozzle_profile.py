import pytest

from spacevoxel.propulsion.profile import Profile2D, sample_nozzle_profile


def _default(**overrides):
    args = dict(
        seed=0,
        length=1.0,
        throat_radius=0.1,
        exit_radius=0.3,
        axial_samples=48,
        throat_curvature_factor=0.5,
        flare_jitter=0.0,
    )
    args.update(overrides)
    return sample_nozzle_profile(**args)


def test_profile_spans_throat_to_exit():
    profile = _default()
    assert len(profile) == 48
    assert profile[0].x == pytest.approx(0.0)
    assert profile[0].y == pytest.approx(0.1)
    assert profile.length == pytest.approx(1.0)
    assert profile[-1].y == pytest.approx(0.3)
    assert profile.min_radius() == pytest.approx(0.1)
    assert profile.max_radius() == pytest.approx(0.3)


def test_profile_is_monotonic_without_jitter():
    profile = _default(throat_curvature_factor=1.0)
    for previous, current in zip(profile.points, profile.points[1:]):
        assert current.x >= previous.x
        assert current.y >= previous.y - 1e-12


def test_inputs_are_clamped():
    profile = _default(length=-5.0, throat_radius=0.0, exit_radius=-1.0, axial_samples=1)
    assert len(profile) == 2
    assert profile.length == pytest.approx(0.01)
    assert profile[0].y == pytest.approx(0.001)
    assert profile[-1].y == pytest.approx(0.001)


def test_jitter_is_deterministic_and_limited_to_exit_band():
    smooth = _default()
    first = _default(seed=11, flare_jitter=1.0)
    second = _default(seed=11, flare_jitter=1.0)
    assert first.pairs() == second.pairs()

    differing = [index for index, (a, b) in enumerate(zip(smooth, first)) if a.y != b.y]
    assert differing
    z_blend = 1.0 * 0.15
    for index in differing:
        u = (smooth[index].x - z_blend) / (1.0 - z_blend)
        assert u >= 0.8
        assert abs(first[index].y - smooth[index].y) <= 0.03 * 0.3 + 1e-9
    assert all(point.y >= 0.0001 for point in first)


def test_seed_changes_jitter():
    assert _default(seed=1, flare_jitter=1.0).pairs() != _default(seed=2, flare_jitter=1.0).pairs()


def test_profile_from_pairs():
    profile = Profile2D.from_pairs([(0, 1), (2, 3)])
    assert profile.length == pytest.approx(2.0)
    assert profile.pairs() == [(0.0, 1.0), (2.0, 3.0)]
    assert Profile2D(()).max_radius() == 0.0


def test_profile_points_are_copies():
    profile = _default()
    before = profile.pairs()
    point = profile[3]
    point.x = -50.0
    point.y = -1.0
    profile.points[4].x = -50.0
    assert profile[3].x != -50.0
    assert profile.pairs() == before
    assert all(current.x >= previous.x for previous, current in zip(profile.points, profile.points[1:]))


@pytest.mark.parametrize(
    "overrides",
    [
        dict(length=0.0),
        dict(length=-3.0, flare_jitter=1.0),
        dict(flare_jitter=0.0),
        dict(seed=7, flare_jitter=1.0, throat_curvature_factor=0.0),
        dict(seed=-12, flare_jitter=1.0, exit_radius=0.1),
        dict(axial_samples=2),
        dict(axial_samples=2, flare_jitter=1.0),
    ],
)
def test_profile_keeps_axial_order_and_positive_radius(overrides):
    pairs = _default(**overrides).pairs()
    assert len(pairs) >= 2
    for (z0, _), (z1, r1) in zip(pairs, pairs[1:]):
        assert z1 >= z0
        assert r1 >= 0.0
    assert pairs[0][1] >= 0.0
