from conftest import submit_complaint

from jambangan.services.storage_service import ImageStorage


def test_uploaded_image_is_served_by_reference(client, alice_client):
    complaint_id = submit_complaint(alice_client).get_json()['lastInsertId']
    complaint = alice_client.get(f'/complaints/{complaint_id}').get_json()

    assert complaint['image_url'] == f"http://localhost/uploads/{complaint['image']}"

    resp = client.get(f"/uploads/{complaint['image']}")

    assert resp.status_code == 200
    assert resp.mimetype == 'image/jpeg'


def test_missing_and_escaping_paths_are_not_served(client):
    assert client.get('/uploads/complaints/missing.jpg').status_code == 404
    assert client.get('/uploads/../config.py').status_code == 404


def test_public_base_url_is_used_when_configured(app):
    app.config['PUBLIC_BASE_URL'] = 'https://api.example.org/'

    with app.app_context():
        assert ImageStorage.resolve_url('umkm/a.jpg') == 'https://api.example.org/uploads/umkm/a.jpg'
        assert ImageStorage.resolve_url('https://cdn.example.org/x.jpg') == 'https://cdn.example.org/x.jpg'
        assert ImageStorage.resolve_url(None) is None


def test_s3_references_resolve_to_bucket_url(app):
    app.config.update(AWS_ACCESS_KEY_ID='key', S3_BUCKET_NAME='jambangan-images', AWS_REGION='ap-southeast-1')

    with app.app_context():
        url = ImageStorage.resolve_url('complaints/a.jpg')

    assert url == 'https://jambangan-images.s3.ap-southeast-1.amazonaws.com/complaints/a.jpg'


def test_s3_upload_route_redirects_to_bucket(app, client):
    app.config.update(AWS_ACCESS_KEY_ID='key', S3_BUCKET_NAME='jambangan-images', AWS_REGION='ap-southeast-1')

    resp = client.get('/uploads/complaints/a.jpg')

    assert resp.status_code == 302
    assert resp.headers['Location'] == 'https://jambangan-images.s3.ap-southeast-1.amazonaws.com/complaints/a.jpg'
