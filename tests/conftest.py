import io

import pytest
from PIL import Image

from extensions import db
from jambangan import create_app
from jambangan.models.user import User, UserRole


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    # fresh dict so tests can rotate keys without touching TestingConfig
    app.config['JWT_SIGNING_KEYS'] = dict(app.config['JWT_SIGNING_KEYS'])

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(username, password='secret123', level=UserRole.USER.value, is_active=False):
        with app.app_context():
            user = User(username=username, password=password, level=level, is_active=is_active)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user


@pytest.fixture
def login(app):
    def _login(username, password='secret123'):
        client = app.test_client()
        resp = client.post('/login', json={'username': username, 'password': password})
        assert resp.status_code == 200, resp.get_json()
        return client
    return _login


@pytest.fixture
def admin_client(make_user, login):
    make_user('admin', level=UserRole.ADMIN.value)
    return login('admin')


@pytest.fixture
def alice_id(make_user):
    return make_user('alice')


@pytest.fixture
def alice_client(alice_id, login):
    return login('alice')


def image_file(name='photo.png', color=(200, 30, 30)):
    buf = io.BytesIO()
    Image.new('RGB', (16, 16), color).save(buf, format='PNG')
    buf.seek(0)
    return buf, name


def submit_complaint(client, **fields):
    data = {
        'text': 'pothole',
        'type': 'road',
        'address': 'Jl. Jambangan 1',
        'popup_content': 'Pothole near the market',
        'coordinates': '{"type": "Point", "coordinates": [112.71, -7.32]}',
        'image': image_file(),
    }
    data.update(fields)
    data = {key: value for key, value in data.items() if value is not None}
    return client.post('/complaints', data=data, content_type='multipart/form-data')
