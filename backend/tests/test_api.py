def test_liveness_probe(client):
    res = client.get('/')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'ok'}


def test_cors_allows_any_origin_when_unconfigured(client):
    res = client.get('/', headers={'Origin': 'http://example.test'})
    assert res.status_code == 200
    assert res.headers.get('Access-Control-Allow-Origin') in ('*', 'http://example.test')


def test_app_exposes_its_own_store(flask_app, store):
    assert flask_app.extensions['session_store'] is store
    assert flask_app.extensions['session_protocol'].store is store


def test_socketio_runs_in_threading_mode(flask_app):
    from scoreroom import socketio
    assert socketio.server.eio.async_mode == 'threading'
