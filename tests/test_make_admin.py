import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'scripts')))

from make_admin import make_admin

from jambangan.models.user import User


def test_creates_admin_when_password_given(app, login):
    assert make_admin('root', 'rootpass', app=app) is True

    with app.app_context():
        assert User.query.filter_by(username='root').one().is_admin

    assert login('root', 'rootpass').get('/users').status_code == 200


def test_promotes_existing_user(app, alice_id):
    assert make_admin('alice', app=app) is True

    with app.app_context():
        assert User.query.filter_by(username='alice').one().is_admin


def test_unknown_user_without_password(app):
    assert make_admin('ghost', app=app) is False
