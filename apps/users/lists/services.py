"""Users Lists - Application Services.

Write endpoints receive ``clients``, ``masters`` and ``tickets`` as lists of
IRIs (or bare ids). Only the collections present in the request are touched.
A blacklist skips entries it cannot use and reports them in ``messages``;
favorites reject the whole request instead.
"""
import logging
from typing import Dict, List, Optional, Tuple

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.common.core.exceptions import (
    BlackListNotFound, Blacklisted, FavoriteNotFound, ListAlreadyExists, MissingRequiredFields,
    PermissionDenied, TicketNotFound, UserNotFound,
)
from apps.common.core.iri import is_uuid, parse_reference
from apps.marketplace.tickets.models import Ticket
from .models import BlackList, Favorite

logger = logging.getLogger('apps.lists')

LIST_FIELDS = ('clients', 'masters', 'tickets')


def _find_user(value, role: str):
    pk = parse_reference(value, 'users')
    if pk is None or not is_uuid(pk):
        return None
    return get_user_model().objects.filter(pk=pk, role=role, is_active=True).first()


def _find_ticket(value) -> Optional[Ticket]:
    pk = parse_reference(value, 'tickets')
    if pk is None or not pk.isdigit():
        return None
    return Ticket.objects.filter(pk=int(pk)).first()


class MemberListService:
    """Create, patch and delete of a per-member list; subclasses choose the model and the entry rules."""
    model = None
    not_found = None
    exists_message = ''
    # unknown entries raise instead of being reported
    strict = True
    allow_self = True

    @classmethod
    def mine(cls, user):
        member_list = cls.model.objects.of(user).first()
        if member_list is None:
            raise cls.not_found()
        return member_list

    @classmethod
    def get(cls, pk):
        member_list = cls.model.objects.filter(pk=pk).first()
        if member_list is None:
            raise cls.not_found(details={'id': str(pk)})
        return member_list

    @classmethod
    def resolve_entries(cls, user, entries: Dict) -> Tuple[Dict[str, List], List[str]]:
        if all(entries.get(name) is None for name in LIST_FIELDS):
            raise MissingRequiredFields(message='At least one field (clients, masters, or tickets) must be provided',
                                        fields=list(LIST_FIELDS))
        User = get_user_model()
        roles = {'clients': (User.Role.CLIENT, 'Client'), 'masters': (User.Role.MASTER, 'Master')}
        resolved, messages = {}, []
        for name in LIST_FIELDS:
            values = entries.get(name)
            if values is None:
                continue
            found = []
            for value in dict.fromkeys(str(value) for value in values):
                if name == 'tickets':
                    obj, label, error = _find_ticket(value), 'Ticket', TicketNotFound
                else:
                    role, label = roles[name]
                    obj, error = _find_user(value, role), UserNotFound
                if obj is None:
                    if cls.strict:
                        raise error(f'{label} #{value} not found', details={'field': name, 'value': value})
                    messages.append(f'{label} #{value} not found')
                    continue
                if not cls.allow_self and name != 'tickets' and obj.pk == user.pk:
                    messages.append(f'Cannot add yourself to {cls.model._meta.verbose_name.lower()}')
                    continue
                found.append(obj)
            resolved[name] = found
        return resolved, messages

    @classmethod
    @transaction.atomic
    def create(cls, user, **entries):
        """Returns the new list and the messages about skipped entries."""
        if cls.model.objects.of(user).exists():
            raise ListAlreadyExists(cls.exists_message)
        resolved, messages = cls.resolve_entries(user, entries)
        member_list = cls.model.objects.create(owner=user)
        for name, objects in resolved.items():
            getattr(member_list, name).set(objects)
        logger.info(f"{cls.model.__name__} created: {member_list.id} by {user.id}")
        return member_list, messages

    @classmethod
    @transaction.atomic
    def update(cls, member_list, user, **entries):
        """Replace the passed collections; the others stay as they are."""
        cls.check_owner(member_list, user)
        resolved, messages = cls.resolve_entries(user, entries)
        for name, objects in resolved.items():
            getattr(member_list, name).set(objects)
        member_list.save(update_fields=['updated_at'])
        logger.info(f"{cls.model.__name__} updated: {member_list.id} ({', '.join(resolved)})")
        return member_list, messages

    @classmethod
    def delete(cls, member_list, user) -> None:
        if not user.is_admin:
            cls.check_owner(member_list, user)
        list_id = member_list.id
        member_list.delete()
        logger.info(f"{cls.model.__name__} deleted: {list_id} by {user.id}")

    @staticmethod
    def check_owner(member_list, user) -> None:
        if member_list.owner_id != user.pk:
            raise PermissionDenied("Ownership doesn't match")


class BlackListService(MemberListService):
    model = BlackList
    not_found = BlackListNotFound
    exists_message = 'This user has blacklist, patch instead'
    strict = False
    allow_self = False

    @staticmethod
    def check(author, other=None, ticket: Optional[Ticket] = None) -> None:
        """Forbid ``author`` to deal with a ticket they blacklisted, or with a member when either side blocked the other."""
        if ticket is not None and BlackList.objects.of(author).filter(tickets=ticket).exists():
            raise Blacklisted('You blacklisted this ticket')
        if other is None:
            return
        if BlackList.objects.listing(author, other).exists():
            raise Blacklisted('You blacklisted this user')
        if BlackList.objects.listing(other, author).exists():
            raise Blacklisted('You are blacklisted by this user')

    @staticmethod
    def visible_tickets(queryset, viewer):
        """Drop tickets ``viewer`` blacklisted and the tickets of members on their blacklist."""
        blacklist = BlackList.objects.of(viewer).first()
        if blacklist is None:
            return queryset
        blocked = list(blacklist.clients.values_list('pk', flat=True)) + list(blacklist.masters.values_list('pk', flat=True))
        return (queryset.exclude(pk__in=blacklist.tickets.values('pk'))
                .exclude(author__in=blocked)
                .exclude(master__in=blocked))


class FavoriteService(MemberListService):
    model = Favorite
    not_found = FavoriteNotFound
    exists_message = 'This user has favorites, patch instead'

    @staticmethod
    def includes(owner, user) -> bool:
        return Favorite.objects.listing(owner, user).exists()
