"""Common Core API - Hydra collection envelope."""
from typing import Any, List
from rest_framework.response import Response

HYDRA_MEMBER = 'hydra:member'
HYDRA_TOTAL = 'hydra:totalItems'


def wants_hydra(request) -> bool:
    accept = request.META.get('HTTP_ACCEPT', '')
    if 'application/ld+json' in accept:
        return True
    return request.query_params.get('hydra') in ('1', 'true')


def collection_response(request, items: List[Any]) -> Response:
    """Plain JSON array, or a Hydra envelope when the client asks for JSON-LD."""
    if wants_hydra(request):
        return Response({HYDRA_MEMBER: items, HYDRA_TOTAL: len(items)})
    return Response(items)


class HydraListMixin:
    """ListAPIView mixin returning a plain array or a Hydra envelope."""

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return collection_response(request, serializer.data)
