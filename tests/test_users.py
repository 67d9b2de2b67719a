from conftest import submit_complaint

from extensions import db
from jambangan.models.complaint import Complaint
from jambangan.models.map_annotation import MapAnnotation
from jambangan.models.user import User


def test_admin_routes_reject_ordinary_users(alice_client):
    for method, path in [('get', '/users'), ('post', '/users'), ('put', '/users/1'),
                         ('delete', '/users/1'), ('get', '/users/1/hasposts')]:
        resp = getattr(alice_client, method)(path, json={})
        assert resp.status_code == 403, path
        assert resp.get_json() == {'message': 'Access denied. Admin privileges required'}


def test_admin_routes_reject_missing_token(client):
    assert client.get('/users').status_code == 401


def test_list_users(admin_client, alice_id):
    resp = admin_client.get('/users')

    assert resp.status_code == 200
    usernames = [user['username'] for user in resp.get_json()]
    assert usernames == ['admin', 'alice']
    assert all('password_hash' not in user for user in resp.get_json())


def test_create_user(app, admin_client, login):
    resp = admin_client.post('/users', json={'username': 'budi', 'password': 'pw12345', 'level': 'User'})

    assert resp.status_code == 201
    assert resp.get_json()['user']['level'] == 'User'

    with app.app_context():
        user = User.query.filter_by(username='budi').first()
        assert user.password_hash != 'pw12345'
        assert user.check_password('pw12345')

    login('budi', 'pw12345')


def test_create_duplicate_username(admin_client, alice_id):
    resp = admin_client.post('/users', json={'username': 'alice', 'password': 'other'})

    assert resp.status_code == 400
    assert 'already exists' in resp.get_json()['message']


def test_create_user_validates_input(admin_client):
    assert admin_client.post('/users', json={'username': 'x'}).status_code == 400
    assert admin_client.post('/users', json={'username': 'x', 'password': 'y', 'level': 'Root'}).status_code == 400


def test_update_username_collision(admin_client, make_user, alice_id):
    make_user('budi')

    resp = admin_client.put(f'/users/{alice_id}', json={'username': 'budi'})

    assert resp.status_code == 400


def test_update_keeping_own_username_and_changing_password(app, admin_client, alice_id, login):
    resp = admin_client.put(f'/users/{alice_id}', json={'username': 'alice', 'password': 'newpass1'})

    assert resp.status_code == 200
    login('alice', 'newpass1')


def test_update_without_password_keeps_hash(app, admin_client, alice_id):
    with app.app_context():
        old_hash = db.session.get(User, alice_id).password_hash

    resp = admin_client.put(f'/users/{alice_id}', json={'username': 'alice2'})

    assert resp.status_code == 200
    with app.app_context():
        user = db.session.get(User, alice_id)
        assert user.username == 'alice2'
        assert user.password_hash == old_hash


def test_update_missing_user(admin_client):
    assert admin_client.put('/users/999', json={'username': 'ghost'}).status_code == 404


def test_delete_missing_user(admin_client):
    resp = admin_client.delete('/users/999')

    assert resp.status_code == 404
    assert resp.get_json() == {'message': 'User not found'}


def test_delete_user_removes_their_complaints(app, admin_client, alice_client, alice_id):
    assert submit_complaint(alice_client).status_code == 201

    resp = admin_client.delete(f'/users/{alice_id}')

    assert resp.status_code == 200
    with app.app_context():
        assert db.session.get(User, alice_id) is None
        assert Complaint.query.count() == 0
        assert MapAnnotation.query.count() == 0


def test_has_posts(admin_client, alice_client, alice_id):
    assert admin_client.get(f'/users/{alice_id}/hasposts').get_json() == {'hasPosts': False}

    submit_complaint(alice_client)

    assert admin_client.get(f'/users/{alice_id}/hasposts').get_json() == {'hasPosts': True}


def test_create_user_rejects_non_string_fields(admin_client):
    for body in ({'username': 5, 'password': 'x'},
                 {'username': 'budi', 'password': 12345},
                 {'username': 'budi', 'password': 'x', 'level': ['Admin']},
                 ['budi', 'x']):
        resp = admin_client.post('/users', json=body)
        assert resp.status_code == 400, body


def test_update_user_rejects_non_string_fields(app, admin_client, alice_id):
    for body in ({'username': 7}, {'password': 12345}):
        resp = admin_client.put(f'/users/{alice_id}', json=body)
        assert resp.status_code == 400, body

    with app.app_context():
        assert db.session.get(User, alice_id).username == 'alice'
