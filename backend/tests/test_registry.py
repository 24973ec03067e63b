from tictactoe.registry import RoomRegistry


def test_get_or_create_is_lazy_and_stable():
    registry = RoomRegistry()
    assert registry.get('AB12') is None
    room = registry.get_or_create('AB12')
    assert registry.get_or_create('AB12') is room
    assert 'AB12' in registry
    assert len(registry) == 1


def test_registries_are_isolated():
    first, second = RoomRegistry(), RoomRegistry()
    first.get_or_create('AB12')
    assert second.get('AB12') is None


def test_find_by_connection_uses_bindings():
    registry = RoomRegistry()
    room = registry.get_or_create('AB12')
    room.join('sid-alice', 'Alice')
    assert registry.find_by_connection('sid-alice') is None
    registry.bind('sid-alice', 'AB12')
    assert registry.find_by_connection('sid-alice') is room
    registry.unbind('sid-alice')
    assert registry.find_by_connection('sid-alice') is None


def test_remove_drops_room_and_its_bindings():
    registry = RoomRegistry()
    room = registry.get_or_create('AB12')
    room.join('sid-alice', 'Alice')
    registry.bind('sid-alice', 'AB12')
    assert registry.remove('AB12') is room
    assert registry.get('AB12') is None
    assert registry.find_by_connection('sid-alice') is None
    assert registry.remove('AB12') is None


def test_recreated_room_gets_new_epoch():
    registry = RoomRegistry()
    old = registry.get_or_create('AB12')
    registry.remove('AB12')
    new = registry.get_or_create('AB12')
    assert new is not old
    assert new.epoch != old.epoch


def test_codes_lists_live_rooms():
    registry = RoomRegistry()
    registry.get_or_create('AB12')
    registry.get_or_create('CD34')
    assert sorted(registry.codes()) == ['AB12', 'CD34']
    assert len(registry.rooms()) == 2
