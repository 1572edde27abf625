"""Marketplace Tickets - Application Services."""
import logging
from typing import Any, Dict, Iterable, Optional

from django.db import transaction

from apps.common.core.exceptions import (
    NotFoundError, PermissionDenied, RoleMismatch, TicketNotFound, ValidationError,
)
from apps.common.core.validators import validate_image_upload
from apps.common.geography.services import AddressService
from apps.users.lists.services import BlackListService
from .models import Category, Occupation, Ticket, TicketImage, Unit

logger = logging.getLogger('apps.tickets')

MAX_TICKET_IMAGES = 10


class TicketSelector:
    """Read-side queries."""

    @staticmethod
    def directory(viewer=None):
        qs = Ticket.objects.with_relations()
        if viewer is not None and viewer.is_authenticated:
            qs = BlackListService.visible_tickets(qs, viewer)
        return qs

    @staticmethod
    def get(ticket_id) -> Ticket:
        try:
            return Ticket.objects.with_relations().get(pk=ticket_id)
        except (Ticket.DoesNotExist, ValueError):
            raise TicketNotFound(details={'ticket_id': str(ticket_id)})

    @staticmethod
    def owner_stats(tickets: Iterable[Ticket]) -> Dict[Any, Dict]:
        """Review count and average rating of every ticket owner, keyed by user id."""
        from apps.marketplace.reviews.services import ReviewSelector
        owner_ids = {ticket.owner_id for ticket in tickets if ticket.owner_id}
        return ReviewSelector.stats_for_users(owner_ids)

    @staticmethod
    def active_for(user, service: bool):
        if service:
            return Ticket.objects.active().services().filter(master=user)
        return Ticket.objects.active().requests().filter(author=user)


class TicketService:

    @staticmethod
    def _resolve_refs(data: Dict) -> Dict:
        resolved = dict(data)
        if 'category' in resolved:
            resolved['category'] = Category.objects.filter(pk=resolved['category']).first()
            if resolved['category'] is None:
                raise NotFoundError('Category not found', details={'field': 'category'})
        for field, model in (('subcategory', Occupation), ('unit', Unit)):
            if resolved.get(field) is not None:
                obj = model.objects.filter(pk=resolved[field]).first()
                if obj is None:
                    raise NotFoundError(f'{field.capitalize()} not found', details={'field': field})
                resolved[field] = obj
        return resolved

    @staticmethod
    @transaction.atomic
    def create_ticket(user, **data) -> Ticket:
        """Clients publish requests (``author``), masters publish services (``master``)."""
        if not getattr(user, 'is_member', False):
            raise RoleMismatch('Only clients and masters can publish tickets')
        addresses = data.pop('addresses', None) or []
        data = TicketService._resolve_refs(data)
        if user.is_master:
            ticket = Ticket.objects.create(master=user, service=True, **data)
        else:
            ticket = Ticket.objects.create(author=user, service=False, **data)
        if addresses:
            ticket.addresses.set(AddressService.resolve_many(addresses))
        logger.info(f"Ticket created: {ticket.id} by {user.id} (service={ticket.service})")
        return ticket

    @staticmethod
    @transaction.atomic
    def update_ticket(ticket: Ticket, user, **data) -> Ticket:
        TicketService.check_owner(ticket, user)
        addresses = data.pop('addresses', None)
        data = TicketService._resolve_refs(data)
        for key, value in data.items():
            setattr(ticket, key, value)
        ticket.save()
        if addresses is not None:
            ticket.addresses.set(AddressService.resolve_many(addresses))
        logger.info(f"Ticket updated: {ticket.id}")
        return ticket

    @staticmethod
    def check_owner(ticket: Ticket, user) -> None:
        if ticket.owner_id is None or ticket.owner_id != user.pk:
            raise PermissionDenied('Only the owner can change this ticket')

    @staticmethod
    def add_photo(ticket: Ticket, user, image_file) -> TicketImage:
        TicketService.check_owner(ticket, user)
        validate_image_upload(image_file)
        if ticket.images.count() >= MAX_TICKET_IMAGES:
            raise ValidationError(f'A ticket can have at most {MAX_TICKET_IMAGES} photos')
        image = TicketImage.objects.create(ticket=ticket, image=image_file, sort_order=ticket.images.count())
        logger.info(f"Photo {image.id} uploaded for ticket {ticket.id}")
        return image


class CatalogSelector:

    @staticmethod
    def categories():
        return Category.objects.all()

    @staticmethod
    def occupations(category_id: Optional[str] = None):
        qs = Occupation.objects.prefetch_related('categories')
        if category_id:
            qs = qs.filter(categories__id=category_id).distinct()
        return qs

    @staticmethod
    def units():
        return Unit.objects.all()
