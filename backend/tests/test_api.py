def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_rooms_empty(client):
    res = client.get('/api/rooms')
    assert res.status_code == 200
    assert res.get_json() == []


def test_unknown_room_is_404(client):
    res = client.get('/api/rooms/ZZZZ')
    assert res.status_code == 404
    assert res.get_json()['error'] == 'Room not found'


def test_room_state_reflects_play(client, make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    alice.emit('joinRoom', 'AB12', 'Alice')
    bob.emit('joinRoom', 'AB12', 'Bob')
    alice.emit('playerMove', 4)

    rooms = client.get('/api/rooms').get_json()
    assert rooms == [{'code': 'AB12', 'phase': 'active', 'players': 2, 'score': {'X': 0, 'O': 0}}]

    state = client.get('/api/rooms/AB12').get_json()
    assert state['board'][4] == 'X'
    assert state['current_mark'] == 'O'
    assert state['turn_count'] == 1
    assert [p['name'] for p in state['players']] == ['Alice', 'Bob']


def test_default_config_wires_round_delay():
    from config import Config
    from tictactoe import create_app

    gateway = create_app(Config).extensions['tictactoe']
    assert Config.ROUND_RESET_DELAY_SEC == 2.5
    assert gateway.reset_delay == 2.5
