"""
Inventory endpoints (admin only).

Stock only changes through an explicit reduction (``PATCH .../quantity``)
or a full edit (``PUT``); see :mod:`clinic.services.inventory`.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.models import InventoryItem
from clinic.permissions import IsAdminRole
from clinic.responses import ok
from clinic.serializers.inventory import (
    InventoryItemSerializer,
    InventoryListQuerySerializer,
    InventoryUpdateSerializer,
    QuantityReductionSerializer,
)
from clinic.services import inventory as inventory_service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def inventory_collection(request):
    if request.method == 'POST':
        s = InventoryItemSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        item = inventory_service.create_item(s.validated_data, user=request.user)
        return ok(InventoryItemSerializer(item).data, message='Item added',
                  status=status.HTTP_201_CREATED)

    q = InventoryListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = InventoryItem.objects.all()
    category = (q.validated_data.get('category') or '').strip()
    if category:
        qs = qs.filter(category=category)
    return ok(InventoryItemSerializer(qs, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def inventory_by_category(request, category: str):
    qs = InventoryItem.objects.filter(category=category)
    return ok(InventoryItemSerializer(qs, many=True).data)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def inventory_detail(request, pk: str):
    if request.method == 'DELETE':
        inventory_service.delete_item(pk, user=request.user)
        return ok(message='Item deleted')

    s = InventoryUpdateSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    item = inventory_service.update_item(pk, s.validated_data, user=request.user)
    return ok(InventoryItemSerializer(item).data, message='Item updated')


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def inventory_reduce(request, pk: str):
    """Dispense stock.

    Body: ``{"quantity": 2}``, the amount to take out.  Fails without
    touching the item when less than that is on hand.
    """
    s = QuantityReductionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    item = inventory_service.reduce_quantity(pk, s.validated_data['quantity'], user=request.user)
    return ok(InventoryItemSerializer(item).data, message='Quantity updated')
