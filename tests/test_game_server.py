import numpy as np
import pytest

import game_server
from game_session import GameSession


class ScriptedRng:
    """Always the first empty cell, always a 2."""

    def choice(self, seq):
        return seq[0]

    def random(self):
        return 0.0


@pytest.fixture
def client(monkeypatch):
    session = GameSession(rng=ScriptedRng())
    session.board = np.array([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    session.score = 4
    monkeypatch.setattr(game_server, 'session', session)
    game_server.app.config['TESTING'] = True
    with game_server.app.test_client() as client:
        yield client


def test_state(client):
    response = client.get('/state')
    assert response.status_code == 200
    data = response.get_json()
    assert data['cells'][:4] == [2, 2, 0, 0]
    assert data['score'] == 4
    assert data['state'] == 'playing'


def test_move(client):
    response = client.post('/move', json={'direction': 'left'})
    assert response.status_code == 200
    data = response.get_json()
    assert data['changed'] is True
    assert data['cells'][0] == 4
    assert data['cells'].count(0) == 14
    assert data['score'] == sum(data['cells'])


def test_move_without_change(client):
    client.post('/move', json={'direction': 'left'})
    first = client.get('/state').get_json()
    assert first['cells'][:4] == [4, 2, 0, 0]
    data = client.post('/move', json={'direction': 'left'}).get_json()
    assert data['changed'] is False
    assert data['cells'] == first['cells']


def test_move_unknown_direction(client):
    response = client.post('/move', json={'direction': 'diagonal'})
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_move_missing_direction(client):
    response = client.post('/move', json={})
    assert response.status_code == 400


def test_new_game(client):
    response = client.post('/new-game')
    assert response.status_code == 200
    data = response.get_json()
    assert len([c for c in data['cells'] if c]) == 2
    assert data['game_over'] is False


@pytest.mark.parametrize("body", [5, True, "direction", ["left"]])
def test_move_body_not_an_object(client, body):
    response = client.post('/move', json=body)
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Missing direction'}


def test_state_error_is_json(client, monkeypatch):
    def broken():
        raise RuntimeError("board went missing")

    monkeypatch.setattr(game_server.session, 'to_dict', broken)
    response = client.get('/state')
    assert response.status_code == 500
    assert response.get_json() == {'error': 'board went missing'}
