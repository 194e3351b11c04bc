def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_rooms_empty_on_startup(client):
    res = client.get('/api/rooms')
    assert res.status_code == 200
    assert res.get_json() == []


def test_unknown_room_is_404(client):
    res = client.get('/api/rooms/NOPE')
    assert res.status_code == 404
    assert 'error' in res.get_json()


def test_room_lobby_reflects_socket_activity(client, connect, fixed_first_turn):
    host = connect('Alice')
    guest = connect('Bob')
    host.emit('create-room', 'abcd')
    guest.emit('join-room', 'abcd')

    res = client.get('/api/rooms/abcd')
    assert res.status_code == 200
    lobby = res.get_json()
    assert lobby['code'] == 'ABCD'
    assert [p['nickname'] for p in lobby['players']] == ['Alice', 'Bob']
    assert lobby['status'] == 'open'
    assert lobby['gameState'] is None

    host.emit('start-game', 'ABCD')
    lobby = client.get('/api/rooms/ABCD').get_json()
    assert lobby['status'] == 'in_progress'
    assert lobby['gameState']['turnIndex'] == 0
    assert client.get('/api/rooms').get_json() == [{'code': 'ABCD', 'players': 2, 'status': 'in_progress'}]
