from conftest import image_file

from extensions import db
from jambangan.models.umkm_post import UmkmPost


def _create_post(client, title='Keripik Tempe', **fields):
    data = {
        'title': title,
        'content': 'Homemade tempe chips',
        'category': 'Makanan',
        'address': 'Jl. Jambangan 2',
        'image': image_file('chips.png'),
    }
    data.update(fields)
    data = {key: value for key, value in data.items() if value is not None}
    return client.post('/posts', data=data, content_type='multipart/form-data')


def _post_ids(app):
    with app.app_context():
        return [post.id for post in UmkmPost.query.order_by(UmkmPost.id)]


def test_new_post_starts_unapproved(app, alice_client):
    resp = _create_post(alice_client, isApproved='true', is_approved='true')

    assert resp.status_code == 201
    assert resp.get_json()['message'] == 'Posts submitted for review'
    with app.app_context():
        assert db.session.get(UmkmPost, resp.get_json()['id']).is_approved is False


def test_post_requires_image(alice_client):
    assert _create_post(alice_client, image=None).status_code == 400


def test_public_listing_shows_only_approved(app, client, admin_client, alice_client):
    approved_id = _create_post(alice_client, title='Approved').get_json()['id']
    pending_id = _create_post(alice_client, title='Pending').get_json()['id']
    admin_client.patch(f'/umkm/posts/{approved_id}/approve')

    posts = client.get('/public/posts').get_json()

    assert [post['id'] for post in posts] == [approved_id]
    assert all(post['isApproved'] for post in posts)
    assert client.get(f'/public/posts/{approved_id}').status_code == 200
    assert client.get(f'/public/posts/{pending_id}').status_code == 404


def test_moderation_is_idempotent(app, client, admin_client, alice_client):
    post_id = _create_post(alice_client).get_json()['id']

    for _ in range(2):
        resp = admin_client.patch(f'/umkm/posts/{post_id}/approve')
        assert resp.status_code == 200
        assert resp.get_json()['isApproved'] is True

    for _ in range(2):
        resp = admin_client.patch(f'/umkm/posts/{post_id}/take-down')
        assert resp.status_code == 200
        assert resp.get_json()['isApproved'] is False

    with app.app_context():
        assert db.session.get(UmkmPost, post_id).is_approved is False
    assert client.get('/public/posts').get_json() == []


def test_moderation_requires_admin(alice_client):
    post_id = _create_post(alice_client).get_json()['id']

    assert alice_client.patch(f'/umkm/posts/{post_id}/approve').status_code == 403
    assert alice_client.patch(f'/umkm/posts/{post_id}/take-down').status_code == 403


def test_moderating_missing_post(admin_client):
    assert admin_client.patch('/umkm/posts/999/approve').status_code == 404


def test_user_sees_all_posts(alice_client):
    _create_post(alice_client, title='One')
    _create_post(alice_client, title='Two')

    resp = alice_client.get('/umkm/posts')

    assert [post['title'] for post in resp.get_json()] == ['One', 'Two']


def test_get_post_by_id_is_public(client, alice_client):
    post_id = _create_post(alice_client).get_json()['id']

    assert client.get(f'/umkm/{post_id}').get_json()['title'] == 'Keripik Tempe'
    assert client.get('/umkm/999').status_code == 404


def test_update_without_image_keeps_image(app, admin_client, alice_client):
    post_id = _create_post(alice_client).get_json()['id']
    with app.app_context():
        old_image = db.session.get(UmkmPost, post_id).image

    resp = admin_client.put(f'/umkm/posts/{post_id}', data={'title': 'Keripik Pedas'},
                            content_type='multipart/form-data')

    assert resp.status_code == 200
    with app.app_context():
        post = db.session.get(UmkmPost, post_id)
        assert post.title == 'Keripik Pedas'
        assert post.content == 'Homemade tempe chips'
        assert post.image == old_image


def test_update_with_image_replaces_it(app, admin_client, alice_client):
    post_id = _create_post(alice_client).get_json()['id']
    with app.app_context():
        old_image = db.session.get(UmkmPost, post_id).image

    resp = admin_client.put(f'/umkm/posts/{post_id}', data={'image': image_file('new.jpg')},
                            content_type='multipart/form-data')

    assert resp.status_code == 200
    with app.app_context():
        assert db.session.get(UmkmPost, post_id).image != old_image
    assert admin_client.get(f'/uploads/{old_image}').status_code == 404


def test_delete_post(app, admin_client, alice_client):
    post_id = _create_post(alice_client).get_json()['id']

    assert admin_client.delete(f'/umkm/{post_id}').status_code == 200
    assert _post_ids(app) == []
    assert admin_client.delete(f'/umkm/{post_id}').status_code == 404


def test_post_accepts_older_field_names(app, alice_client):
    resp = alice_client.post('/posts', data={
        'judul': 'Sambal Pecel',
        'content': 'Homemade pecel sauce',
        'kategori': 'Makanan',
        'alamat': 'Jl. Asli 2',
        'image': image_file('sambal.png'),
    }, content_type='multipart/form-data')

    assert resp.status_code == 201
    with app.app_context():
        post = db.session.get(UmkmPost, resp.get_json()['id'])
        assert post.title == 'Sambal Pecel'
        assert post.category == 'Makanan'
        assert post.address == 'Jl. Asli 2'


def test_update_accepts_older_field_names(app, admin_client, alice_client):
    post_id = _create_post(alice_client).get_json()['id']

    resp = admin_client.put(f'/umkm/posts/{post_id}', data={'judul': 'Keripik Balado', 'alamat': 'Jl. Baru 3'},
                            content_type='multipart/form-data')

    assert resp.status_code == 200
    with app.app_context():
        post = db.session.get(UmkmPost, post_id)
        assert post.title == 'Keripik Balado'
        assert post.address == 'Jl. Baru 3'


def test_update_rejects_blank_title_or_content(app, admin_client, alice_client):
    post_id = _create_post(alice_client).get_json()['id']

    for field in ('title', 'content'):
        resp = admin_client.put(f'/umkm/posts/{post_id}', data={field: '  '},
                                content_type='multipart/form-data')
        assert resp.status_code == 400

    with app.app_context():
        post = db.session.get(UmkmPost, post_id)
        assert post.title == 'Keripik Tempe'
        assert post.content == 'Homemade tempe chips'
