"""Common Core API Package."""
from .permissions import IsMarketplaceMember
from .handlers import custom_exception_handler
from .hydra import HydraListMixin, collection_response, wants_hydra
from .serializers import IRIField, MoneyField, PhotoUploadSerializer, ErrorResponseSerializer

__all__ = [
    'IsMarketplaceMember',
    'custom_exception_handler',
    'HydraListMixin', 'collection_response', 'wants_hydra',
    'IRIField', 'MoneyField', 'PhotoUploadSerializer', 'ErrorResponseSerializer',
]
