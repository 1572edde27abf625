"""Common Core - Field Validators."""
from django.core.validators import RegexValidator

from apps.common.core.exceptions import InvalidFileType, ValidationError

phone_validator = RegexValidator(
    regex=r'^\+?\d{10,15}$',
    message='Phone number must contain 10 to 15 digits with an optional leading +.'
)

ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp', 'image/gif')
MAX_IMAGE_SIZE = 10 * 1024 * 1024


def validate_image_upload(upload) -> None:
    """Reject uploads that are not images or exceed the size limit."""
    content_type = getattr(upload, 'content_type', '') or ''
    if content_type and content_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidFileType(details={'content_type': content_type})
    if upload.size > MAX_IMAGE_SIZE:
        raise ValidationError('File is too large', details={'max_size': MAX_IMAGE_SIZE})
