"""Common Core - Upload Paths."""
import uuid


def _build_path(prefix: str, owner_id, filename: str) -> str:
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else 'jpg'
    return f"{prefix}/{owner_id}/{uuid.uuid4()}.{ext}"


def user_avatar_path(instance, filename: str) -> str:
    """Generate path for user avatar uploads."""
    return _build_path('avatars', getattr(instance, 'pk', None) or 'unknown', filename)


def ticket_image_path(instance, filename: str) -> str:
    return _build_path('tickets', instance.ticket_id, filename)


def review_image_path(instance, filename: str) -> str:
    return _build_path('reviews', instance.review_id, filename)


def appeal_image_path(instance, filename: str) -> str:
    return _build_path('appeals', instance.appeal_id, filename)
