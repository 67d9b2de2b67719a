"""
Image Storage Service
Stores uploaded images on AWS S3 or local disk behind one interface.
Rows keep a storage reference ("folder/name.ext"); URLs are built at read time.
"""

import boto3
from botocore.exceptions import ClientError
from flask import current_app, has_request_context, url_for
import os
import uuid
from PIL import Image, UnidentifiedImageError
import io


class S3Backend:
    """Backend for handling S3 uploads"""

    @staticmethod
    def get_s3_client():
        """Get initialized S3 client"""
        return boto3.client(
            's3',
            aws_access_key_id=current_app.config.get('AWS_ACCESS_KEY_ID'),
            aws_secret_access_key=current_app.config.get('AWS_SECRET_ACCESS_KEY'),
            region_name=current_app.config.get('AWS_REGION', 'us-east-1')
        )

    @staticmethod
    def save(fileobj, reference, content_type):
        s3_client = S3Backend.get_s3_client()
        s3_client.upload_fileobj(
            fileobj,
            current_app.config['S3_BUCKET_NAME'],
            reference,
            ExtraArgs={
                'ACL': 'public-read',
                'ContentType': content_type
            }
        )

    @staticmethod
    def delete(reference):
        s3_client = S3Backend.get_s3_client()
        s3_client.delete_object(Bucket=current_app.config['S3_BUCKET_NAME'], Key=reference)

    @staticmethod
    def url_for(reference):
        bucket_name = current_app.config.get('S3_BUCKET_NAME')
        region = current_app.config.get('AWS_REGION', 'us-east-1')
        return f"https://{bucket_name}.s3.{region}.amazonaws.com/{reference}"


class LocalBackend:
    """
    Local disk storage under UPLOAD_FOLDER
    Use this in development if you don't have AWS S3 configured
    """

    @staticmethod
    def path_for(reference):
        return os.path.join(current_app.config['UPLOAD_FOLDER'], *reference.split('/'))

    @staticmethod
    def save(fileobj, reference, content_type):
        file_path = LocalBackend.path_for(reference)
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        with open(file_path, 'wb') as out:
            out.write(fileobj.read())

    @staticmethod
    def delete(reference):
        file_path = LocalBackend.path_for(reference)
        if os.path.exists(file_path):
            os.remove(file_path)

    @staticmethod
    def url_for(reference):
        base_url = current_app.config.get('PUBLIC_BASE_URL')
        if base_url:
            return f"{base_url.rstrip('/')}/uploads/{reference}"
        if has_request_context():
            return url_for('uploads.serve_upload', filename=reference, _external=True)
        return f"/uploads/{reference}"


class ImageStorage:
    """Service for storing complaint, response and listing images"""

    @staticmethod
    def backend():
        """S3 when credentials and a bucket are configured, local disk otherwise"""
        use_s3 = current_app.config.get('AWS_ACCESS_KEY_ID') and \
                 current_app.config.get('S3_BUCKET_NAME')
        return S3Backend if use_s3 else LocalBackend

    @staticmethod
    def allowed_file(filename):
        """Check if file extension is allowed"""
        allowed_extensions = current_app.config.get('ALLOWED_EXTENSIONS',
                                                     {'png', 'jpg', 'jpeg', 'gif'})
        return '.' in filename and \
               filename.rsplit('.', 1)[1].lower() in allowed_extensions

    @staticmethod
    def compress_image(image_file, max_size=(1920, 1080), quality=85):
        """
        Compress and resize image

        Args:
            image_file: File object or bytes
            max_size: Max dimensions (width, height)
            quality: JPEG quality (1-100)

        Returns:
            Compressed image as bytes, or None if the file is not a readable image
        """
        try:
            # Open image
            img = Image.open(image_file)

            # Convert RGBA to RGB if necessary
            if img.mode in ('RGBA', 'LA', 'P'):
                background = Image.new('RGB', img.size, (255, 255, 255))
                if img.mode == 'P':
                    img = img.convert('RGBA')
                background.paste(img, mask=img.split()[-1] if img.mode in ('RGBA', 'LA') else None)
                img = background
            elif img.mode != 'RGB':
                img = img.convert('RGB')

            # Resize if larger than max_size
            img.thumbnail(max_size, Image.Resampling.LANCZOS)

            # Save to bytes
            output = io.BytesIO()
            img.save(output, format='JPEG', quality=quality, optimize=True)
            output.seek(0)

            return output
        except (UnidentifiedImageError, OSError) as e:
            current_app.logger.error(f'Image compression error: {str(e)}')
            return None

    @staticmethod
    def upload(file, folder='images', compress=True):
        """
        Store an uploaded image

        Args:
            file: File object from request.files
            folder: Folder/prefix inside the store
            compress: Whether to recompress JPEG/PNG as JPEG

        Returns:
            Storage reference or None
        """
        if not file or not file.filename or not ImageStorage.allowed_file(file.filename):
            return None

        file_ext = file.filename.rsplit('.', 1)[1].lower()
        file_to_upload = file.stream

        # Compress image if enabled
        if compress and file_ext in ['jpg', 'jpeg', 'png']:
            compressed_file = ImageStorage.compress_image(file.stream)
            if compressed_file:
                file_to_upload = compressed_file
                file_ext = 'jpg'
            else:
                file.stream.seek(0)  # Reset file pointer

        content_type = 'image/jpeg' if file_ext in ('jpg', 'jpeg') else f'image/{file_ext}'
        reference = f"{folder}/{uuid.uuid4().hex}.{file_ext}"

        try:
            ImageStorage.backend().save(file_to_upload, reference, content_type)
            return reference
        except ClientError as e:
            current_app.logger.error(f'S3 upload error: {str(e)}')
            return None
        except OSError as e:
            current_app.logger.error(f'Local upload error: {str(e)}')
            return None

    @staticmethod
    def delete(reference):
        """
        Delete a stored image

        Returns:
            Success boolean
        """
        if not reference or ImageStorage.is_external(reference):
            return False
        try:
            ImageStorage.backend().delete(reference)
            return True
        except (ClientError, OSError) as e:
            current_app.logger.error(f'Image delete error: {str(e)}')
            return False

    @staticmethod
    def is_external(reference):
        return reference.startswith(('http://', 'https://'))

    @staticmethod
    def resolve_url(reference):
        """Turn a stored reference into a URL a client can fetch"""
        if not reference:
            return None
        if ImageStorage.is_external(reference):
            return reference
        return ImageStorage.backend().url_for(reference)
