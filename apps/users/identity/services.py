"""Users Identity - Services."""
import logging
from typing import Any, Dict, List, Optional

from django.contrib.auth import authenticate
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.common.core.exceptions import AuthenticationError, InvalidCredentials, NotFoundError, UserNotFound
from apps.common.geography.services import AddressService
from .models import User

logger = logging.getLogger('apps.identity')


class AuthService:
    """Authentication domain service."""

    @staticmethod
    def register(email: str, password: str, first_name: str = '', last_name: str = '', role: str = User.Role.CLIENT) -> User:
        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        return user

    @staticmethod
    def login(email: str, password: str) -> Dict[str, Any]:
        user = authenticate(email=email, password=password)
        if not user:
            raise InvalidCredentials()

        if not user.is_active:
            raise AuthenticationError(message='This account is disabled', code='ACCOUNT_DISABLED')

        refresh = RefreshToken.for_user(user)
        return {
            'access': str(refresh.access_token),
            'refresh': str(refresh),
            'user': user,
        }

    @staticmethod
    def refresh_token(refresh_token: str) -> Dict[str, str]:
        try:
            token = RefreshToken(refresh_token)
        except TokenError:
            raise AuthenticationError(message='Token is invalid or expired', code='INVALID_TOKEN')
        return {
            'access': str(token.access_token),
            'refresh': str(token),
        }


class ProfileService:
    """Profile management domain service."""

    @staticmethod
    def get_user(user_id) -> User:
        try:
            return User.objects.prefetch_related(
                'occupations', 'addresses__province', 'addresses__city', 'addresses__district',
                'addresses__suburb', 'addresses__settlement', 'addresses__community', 'addresses__village',
            ).get(pk=user_id, is_active=True)
        except (User.DoesNotExist, DjangoValidationError):
            raise UserNotFound(details={'user_id': str(user_id)})

    @staticmethod
    @transaction.atomic
    def update_profile(user: User, occupations: Optional[List[int]] = None, addresses: Optional[List[Dict]] = None, **kwargs) -> User:
        allowed_fields = ['first_name', 'last_name', 'phone', 'about']
        update_fields = ['updated_at']
        for field, value in kwargs.items():
            if field in allowed_fields:
                setattr(user, field, value)
                update_fields.append(field)
        if len(update_fields) > 1:
            user.save(update_fields=update_fields)

        if occupations is not None:
            from apps.marketplace.tickets.models import Occupation
            found = list(Occupation.objects.filter(pk__in=occupations))
            if len(found) != len(set(occupations)):
                raise NotFoundError('Occupation not found', details={'occupations': occupations})
            user.occupations.set(found)
        if addresses is not None:
            user.addresses.set(AddressService.resolve_many([dict(address) for address in addresses]))
        logger.info(f"Profile updated: {user.id}")
        return user

    @staticmethod
    def public_profile(user_id, viewer=None) -> Dict[str, Any]:
        """User, the statistics of reviews about them, their active tickets and whether viewer keeps them in favorites."""
        from apps.marketplace.reviews.services import ReviewSelector
        from apps.marketplace.tickets.services import TicketSelector
        from apps.users.lists.services import FavoriteService

        user = ProfileService.get_user(user_id)
        stats = ReviewSelector.stats_for_users([user.pk])[user.pk]
        tickets = []
        if user.is_member:
            tickets = list(TicketSelector.active_for(user, service=user.is_master).with_relations())
        is_favorite = bool(viewer and viewer.is_authenticated and FavoriteService.includes(viewer, user))
        return {'user': user, 'stats': stats, 'active_tickets': tickets, 'is_favorite': is_favorite}
