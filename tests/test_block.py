import sys
sys.path.append('src')

import random

import numpy as np
import pytest

from termtris.block import Block
from termtris.field import Field, Occupancy, OutOfBoundsError
from termtris.shapes import SHAPES, SHAPES_BY_NAME, Color


I = SHAPES_BY_NAME["I"]
O = SHAPES_BY_NAME["O"]
T = SHAPES_BY_NAME["T"]


def test_new_block_copies_shape_mask_and_color():
    block = Block(5, 5, T)
    assert np.array_equal(block.mask, np.array(T.mask))
    assert block.color == Color.MAGENTA
    # Mutating the block never touches the catalog.
    block.mask[0, 0] = 1
    assert T.mask[0][0] == 0


@pytest.mark.parametrize(
    "shape, center",
    [(O, (0, 0)), (I, (1, 0)), (T, (1, 0))],
)
def test_center_leans_towards_origin_for_even_sizes(shape, center):
    assert Block(0, 0, shape).center() == center


def test_cells_are_centred_on_the_anchor():
    assert set(Block(6, 0, O).cells()) == {(6, 0), (7, 0), (6, 1), (7, 1)}
    assert set(Block(6, 0, I).cells()) == {(5, 0), (6, 0), (7, 0), (8, 0)}


def test_rotation_is_clockwise():
    block = Block(5, 5, T)
    assert block.try_rotate(Field(10, 10))
    assert block.mask.tolist() == [[1, 0], [1, 1], [1, 0]]


@pytest.mark.parametrize("shape", SHAPES, ids=lambda s: s.name)
def test_four_rotations_restore_the_mask(shape):
    field = Field(20, 20)
    block = Block(10, 10, shape)
    original = block.mask.copy()
    for _ in range(4):
        assert block.try_rotate(field)
    assert np.array_equal(block.mask, original)


def test_move_onto_fixed_cell_is_rejected():
    field = Field(10, 10)
    field.set(5, 6, Occupancy.FIXED, Color.RED)
    block = Block(5, 4, O)
    mask = block.mask.copy()

    assert not block.try_move(0, 1, field)
    assert (block.x, block.y) == (5, 4)
    assert np.array_equal(block.mask, mask)


def test_move_through_wall_is_rejected():
    field = Field(10, 10)
    block = Block(0, 0, O)
    assert not block.try_move(-1, 0, field)
    assert not block.try_move(0, -1, field)
    assert (block.x, block.y) == (0, 0)
    assert block.try_move(1, 0, field)
    assert (block.x, block.y) == (1, 0)


def test_moving_cells_do_not_block():
    field = Field(10, 10)
    field.set(5, 6, Occupancy.MOVING, Color.RED)
    block = Block(5, 4, O)
    assert block.try_move(0, 1, field)
    assert (block.x, block.y) == (5, 5)


def test_rotation_past_the_top_is_rejected():
    field = Field(10, 10)
    block = Block(5, 0, I)
    assert not block.try_rotate(field)
    assert block.mask.shape == (1, 4)


def test_rotation_onto_fixed_cell_is_rejected():
    field = Field(10, 10)
    field.set(5, 7, Occupancy.FIXED, Color.RED)
    block = Block(5, 5, I)
    assert not block.try_rotate(field)
    assert block.mask.tolist() == [[1, 1, 1, 1]]


def test_overlaps_treats_outside_as_collision():
    field = Field(4, 4)
    assert Block(1, 1, O).overlaps(field) is False
    assert Block(3, 1, O).overlaps(field) is True
    assert Block(1, 3, O).overlaps(field) is True


def test_draw_paints_moving_or_fixed_cells():
    field = Field(10, 10)
    block = Block(2, 2, O)
    block.draw(field, False)
    assert field.count(Occupancy.MOVING) == 4
    assert field.get(3, 3) == (Occupancy.MOVING, Color.YELLOW)

    block.draw(field, True)
    assert field.count(Occupancy.MOVING) == 0
    assert field.count(Occupancy.FIXED) == 4


def test_draw_outside_field_raises():
    field = Field(10, 10)
    with pytest.raises(OutOfBoundsError):
        Block(0, 0, I).draw(field, True)


def test_copy_resets_orientation_and_position():
    block = Block(5, 5, T)
    assert block.try_rotate(Field(10, 10))
    copy = block.copy(2, 3)
    assert copy.shape is T
    assert (copy.x, copy.y) == (2, 3)
    assert np.array_equal(copy.mask, np.array(T.mask))


def test_random_block_is_reproducible_with_seed():
    first = [Block.random(0, 0, random.Random(7)).shape for _ in range(3)]
    second = [Block.random(0, 0, random.Random(7)).shape for _ in range(3)]
    assert first == second
    assert all(shape in SHAPES for shape in first)
