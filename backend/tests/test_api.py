import base64
import logging

from fastapi.testclient import TestClient

from bingo_server.application import create_app
from bingo_server.config import settings


def test_health_reports_session(client):
    res = client.get('/api/health')
    assert res.status_code == 200
    assert res.json() == {
        'ok': True,
        'status': 'waiting',
        'hostConnected': False,
        'players': 0,
        'calledNumbers': 0,
    }


def test_health_tracks_players(client):
    with client.websocket_connect('/') as ann:
        ann.send_json({'type': 'player_join', 'payload': {'name': 'Ann'}})
        ann.receive_json()
        assert client.get('/api/health').json()['players'] == 1


def test_ws_stats(client):
    with client.websocket_connect('/') as conn:
        conn.send_json({'type': 'host_connect'})
        conn.receive_json()
        stats = client.get('/api/ws-stats').json()['stats']
        assert stats['activeConnections'] == 1
        assert stats['messageReceived'] == 1


def test_qr_returns_player_url_and_png(client):
    res = client.get('/qr', headers={'host': 'bingo.local:3000'})
    assert res.status_code == 200
    data = res.json()
    assert data['url'] == f'http://bingo.local:3000{settings.player_page_path}'
    prefix = 'data:image/png;base64,'
    assert data['qr'].startswith(prefix)
    png = base64.b64decode(data['qr'][len(prefix):])
    assert png.startswith(b'\x89PNG')


def test_qr_honors_forwarded_proto(client):
    res = client.get('/qr', headers={'host': 'bingo.example.com', 'x-forwarded-proto': 'https'})
    assert res.json()['url'].startswith('https://bingo.example.com/')


def test_qr_failure_returns_500(client, monkeypatch):
    def broken(_data):
        raise ValueError('encoder exploded')

    monkeypatch.setattr('bingo_server.api.qr.make_qr_data_url', broken)
    res = client.get('/qr')
    assert res.status_code == 500
    assert res.json() == {'error': 'Failed to generate QR'}


def test_apps_do_not_share_sessions():
    first = create_app()
    second = create_app()
    assert first.state.runtime is not second.state.runtime
    assert first.state.runtime.session is not second.state.runtime.session


def test_host_page_is_served_when_configured(tmp_path, monkeypatch):
    (tmp_path / 'bingo.html').write_text('<h1>Host</h1>', encoding='utf-8')
    monkeypatch.setattr(settings, 'host_page_dir', tmp_path)

    with TestClient(create_app()) as test_client:
        res = test_client.get('/host/bingo.html')

    assert res.status_code == 200
    assert 'Host' in res.text


def test_host_page_not_mounted_by_default(client):
    assert client.get('/host/bingo.html').status_code == 404


def test_startup_logs_lan_address(caplog):
    caplog.set_level(logging.INFO, logger='bingo_server.application')

    with TestClient(create_app()):
        pass

    assert 'Local IP for LAN' in caplog.text
