import pytest

from memorygame.errors import RoomFull, RoomIdTaken, RoomNotFound, ValidationError
from memorygame.models import WAITING_FOR_PLAYERS


def test_create_adds_creator_as_only_player(registry):
    room = registry.create('r1', 'p1', 'Alice', 30, 8)
    assert 'r1' in registry
    assert [p.name for p in room.players] == ['Alice']
    assert room.players[0].score == 0
    assert room.game_started is False
    assert room.cards == []
    assert room.status == WAITING_FOR_PLAYERS


@pytest.mark.parametrize('room_id,name,turn_time', [
    ('', 'Alice', 30),
    ('r1', '', 30),
    ('r1', 'Alice', None),
])
def test_create_requires_all_fields(registry, room_id, name, turn_time):
    with pytest.raises(ValidationError):
        registry.create(room_id, 'p1', name, turn_time, 8)
    assert len(registry) == 0


def test_duplicate_room_id_leaves_original_untouched(registry):
    original = registry.create('r1', 'p1', 'Alice', 30, 8)
    with pytest.raises(RoomIdTaken):
        registry.create('r1', 'p9', 'Mallory', 10, 2)
    assert registry.get('r1') is original
    assert [p.name for p in original.players] == ['Alice']
    assert original.pair_count == 8


def test_join_unknown_room(registry):
    with pytest.raises(RoomNotFound):
        registry.join('nope', 'p2', 'Bob')


def test_join_requires_name(registry):
    registry.create('r1', 'p1', 'Alice', 30, 8)
    with pytest.raises(ValidationError):
        registry.join('r1', 'p2', '')


def test_third_join_is_rejected(registry):
    registry.create('r1', 'p1', 'Alice', 30, 8)
    registry.join('r1', 'p2', 'Bob')
    with pytest.raises(RoomFull):
        registry.join('r1', 'p3', 'Cara')
    assert len(registry.get('r1').players) == 2


def test_remove_is_idempotent(registry):
    registry.create('r1', 'p1', 'Alice', 30, 8)
    assert registry.remove('r1') is not None
    assert registry.remove('r1') is None
    assert 'r1' not in registry


def test_rooms_do_not_share_state(registry):
    a = registry.create('a', 'p1', 'Alice', 30, 8, ['/uploads/x.png'])
    b = registry.create('b', 'p2', 'Bob', 30, 8, ['/uploads/x.png'])
    assert a.players is not b.players
    assert a.custom_images is not b.custom_images
    assert a.mutex is not b.mutex


def test_find_by_player(registry):
    registry.create('r1', 'p1', 'Alice', 30, 8)
    registry.join('r1', 'p2', 'Bob')
    assert registry.find_by_player('p2').room_id == 'r1'
    assert registry.find_by_player('p3') is None
