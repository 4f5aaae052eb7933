import dataclasses

import pytest

from ofmesh.gobject import GObject, GObjectType


def test_type_lookup_by_dimension():
    assert GObjectType(0) is GObjectType.VERTEX
    assert GObjectType(2) is GObjectType.SURFACE
    assert GObjectType(3) is GObjectType.PART


def test_unknown_dimension_rejected():
    with pytest.raises(ValueError):
        GObjectType(4)


def test_gobject_keeps_fields():
    g = GObject("edge", 7, GObjectType.CURVE)
    assert g.name == "edge"
    assert g.id == 7
    assert g.type is GObjectType.CURVE


def test_integer_type_is_converted():
    g = GObject("face", 1, 2)
    assert g.type is GObjectType.SURFACE


def test_gobject_is_immutable():
    g = GObject("p", 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        g.id = 5
    assert g.id == 0
    assert g.name == "p"