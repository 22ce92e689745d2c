"""
Inventory stock operations.

Reducing stock is the one read-modify-write in the clinic.  It is done as
a single conditional ``UPDATE ... WHERE quantity >= amount`` so two
nurses dispensing the same item at once can never both succeed past
zero.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound

from clinic.exceptions import InsufficientQuantity
from clinic.models import InventoryItem
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)


def get_item_or_404(pk: str) -> InventoryItem:
    item = InventoryItem.objects.filter(pk=pk).first()
    if item is None:
        raise NotFound('Inventory item not found')
    return item


def create_item(data: Dict[str, Any], *, user=None) -> InventoryItem:
    item = InventoryItem.objects.create(**data)
    log_action(user=user, action='inventory_create', object_type='inventory', object_id=item.pk,
               detail={'name': item.name, 'quantity': item.quantity})
    return item


def reduce_quantity(pk: str, amount: int, *, user=None) -> InventoryItem:
    """Subtract ``amount`` from the stock of item ``pk``.

    Raises ``NotFound`` for an unknown item and ``InsufficientQuantity``
    (reporting the stock on hand) when the result would be negative.  A
    failed call leaves the stored quantity untouched.
    """
    with transaction.atomic():
        updated = (
            InventoryItem.objects
            .filter(pk=pk, quantity__gte=amount)
            .update(quantity=F('quantity') - amount, updated_at=timezone.now())
        )
        if not updated:
            item = get_item_or_404(pk)
            logger.info('Refused to reduce %s by %s: only %s left', pk, amount, item.quantity)
            raise InsufficientQuantity(available=item.quantity)
        item = InventoryItem.objects.get(pk=pk)
    log_action(user=user, action='inventory_reduce', object_type='inventory', object_id=pk,
               detail={'amount': amount, 'remaining': item.quantity})
    return item


def update_item(pk: str, changes: Dict[str, Any], *, user=None) -> InventoryItem:
    with transaction.atomic():
        item = InventoryItem.objects.select_for_update().filter(pk=pk).first()
        if item is None:
            raise NotFound('Inventory item not found')
        for field, value in changes.items():
            setattr(item, field, value)
        item.touch()
        item.save()
    log_action(user=user, action='inventory_update', object_type='inventory', object_id=pk,
               detail={'fields': sorted(changes)})
    return item


def delete_item(pk: str, *, user=None) -> None:
    item = get_item_or_404(pk)
    name = item.name
    item.delete()
    log_action(user=user, action='inventory_delete', object_type='inventory', object_id=pk,
               detail={'name': name})
