from rest_framework import serializers

from clinic.serializers.fields import CleanCharField, OptionalDateField, RequiredDateField, RequiredIntegerField


class InventoryItemSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = CleanCharField(max_length=255)
    category = serializers.CharField(max_length=64)
    quantity = RequiredIntegerField(min_value=1)
    unit = serializers.CharField(max_length=32, required=False, allow_blank=True, default='pcs')
    expirationDate = RequiredDateField(source='expiration_date')
    deliveryDate = OptionalDateField(source='delivery_date')
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    def validate_unit(self, v):
        return v or 'pcs'


class InventoryUpdateSerializer(InventoryItemSerializer):
    """Partial update; an item may be set to zero stock here."""
    quantity = RequiredIntegerField(min_value=0)
    unit = serializers.CharField(max_length=32, required=False, allow_blank=True)


class QuantityReductionSerializer(serializers.Serializer):
    # Amount to subtract from the stock on hand
    quantity = RequiredIntegerField(min_value=1)


class InventoryListQuerySerializer(serializers.Serializer):
    category = serializers.CharField(required=False, allow_blank=True)
