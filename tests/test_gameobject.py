from dataclasses import dataclass

import pytest

from tlib2d.gameobject import GameObject, GameObjectContainer


@dataclass
class Enemy(GameObject):
    name: str = ""


def test_clear_freed_removes_and_keeps_order():
    items = [Enemy(name="a"), Enemy(freed=True, name="b"), Enemy(name="c")]
    cont = GameObjectContainer(items)
    cont.clear_freed()
    assert [e.name for e in cont] == ["a", "c"]
    assert len(cont) == 2


def test_clear_freed_on_all_freed_empties():
    cont = GameObjectContainer([Enemy(freed=True), Enemy(freed=True)])
    cont.clear_freed()
    assert len(cont) == 0


def test_append_and_index():
    cont = GameObjectContainer()
    e = Enemy(name="x")
    cont.append(e)
    assert cont[0] is e
    assert list(cont) == [e]


def test_append_rejects_non_game_objects():
    with pytest.raises(TypeError):
        GameObjectContainer().append("not an object")
    with pytest.raises(TypeError):
        GameObjectContainer([object()])