import numpy as np
import pytest

from domain_mask import DomainMask


def test_interior_of_small_grid() -> None:
    mask = DomainMask(10, 10, margin=2)
    assert mask.center == (5, 5)
    assert mask.radius == 3
    # Every (dx, dy) in [-2, 2]^2 is strictly inside radius 3, nothing else is.
    assert int(mask.interior.sum()) == 25
    assert mask.is_interior(5, 5)
    assert mask.is_interior(5, 7)
    assert not mask.is_interior(5, 8)
    assert not mask.is_interior(0, 0)


def test_out_of_bounds_is_not_interior() -> None:
    mask = DomainMask(10, 10, margin=2)
    assert not mask.is_interior(-1, 5)
    assert not mask.is_interior(10, 5)
    assert not mask.is_interior(5, 42)


def test_grid_edges_are_never_interior() -> None:
    mask = DomainMask(12, 12, margin=0)
    assert not mask.interior[0, :].any()
    assert not mask.interior[-1, :].any()
    assert not mask.interior[:, 0].any()
    assert not mask.interior[:, -1].any()


def test_mask_is_read_only() -> None:
    mask = DomainMask(20, 20)
    with pytest.raises(ValueError):
        mask.interior[10, 10] = False


def test_disc_is_inclusive_and_clipped_to_interior() -> None:
    mask = DomainMask(10, 10, margin=2)
    assert int(mask.disc(5, 5, 1).sum()) == 5
    assert int(mask.disc(5, 5, 0).sum()) == 1
    # A disc far larger than the domain is just the domain.
    assert np.array_equal(mask.disc(5, 5, 50), mask.interior)


def test_non_square_grid_uses_shorter_side() -> None:
    mask = DomainMask(30, 20, margin=2)
    assert mask.radius == 8
    assert mask.is_interior(15, 10)
    assert not mask.is_interior(15 + 9, 10)


@pytest.mark.parametrize("width,height,margin", [(4, 4, 2), (10, 3, 2), (2, 2, 0)])
def test_degenerate_grids_are_rejected(width, height, margin) -> None:
    with pytest.raises(ValueError):
        DomainMask(width, height, margin)
