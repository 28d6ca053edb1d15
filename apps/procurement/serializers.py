from collections.abc import Mapping

from rest_framework import serializers
from .models import ProcurementRequest, Category, Priority, RequestStatus


# =============================================================================
# Checklist
# =============================================================================

class ChecklistSerializer(serializers.Serializer):
    """The six purchasing checklist flags, keyed by their API names."""

    quoteObtained = serializers.BooleanField(source='quote_obtained', required=False)
    managerApproved = serializers.BooleanField(source='manager_approved', required=False)
    orderPlaced = serializers.BooleanField(source='order_placed', required=False)
    paymentProcessed = serializers.BooleanField(source='payment_processed', required=False)
    itemReceived = serializers.BooleanField(source='item_received', required=False)
    invoiceFiled = serializers.BooleanField(source='invoice_filed', required=False)

    def to_internal_value(self, data):
        """Reject checklist items we don't know about."""
        if isinstance(data, Mapping):
            unknown = sorted(set(data) - set(self.fields))
            if unknown:
                raise serializers.ValidationError({
                    name: ['Unknown checklist item.'] for name in unknown
                })
        return super().to_internal_value(data)


# =============================================================================
# Input Serializers
# =============================================================================

class ProcurementRequestFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for request listing.

    Query Parameters:
        status (str): Exact status match
        priority (str): Exact priority match
        category (str): Exact category match
        search (str): Substring of item names, requestor or department

    Empty values are treated as "no filter". Values outside the enum simply
    match nothing.
    """

    status = serializers.CharField(required=False, allow_blank=True)
    priority = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True)


class ProcurementRequestInputSerializer(serializers.Serializer):
    """Writable request fields; validated data is keyed by model field name."""

    # Item details
    itemNameEn = serializers.CharField(source='item_name_en', max_length=200)
    itemNameZh = serializers.CharField(source='item_name_zh', max_length=200, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=Category.choices, required=False)
    quantity = serializers.CharField(max_length=100, required=False, allow_blank=True)
    unit = serializers.CharField(max_length=50, required=False, allow_blank=True)
    estimatedPrice = serializers.CharField(source='estimated_price', max_length=100, required=False, allow_blank=True)
    supplier = serializers.CharField(max_length=200, required=False, allow_blank=True)
    priority = serializers.ChoiceField(choices=Priority.choices, required=False)
    dateNeeded = serializers.CharField(source='date_needed', max_length=50, required=False, allow_blank=True)

    # Requester info
    requestorName = serializers.CharField(source='requestor_name', max_length=200)
    department = serializers.CharField(max_length=200, required=False, allow_blank=True)
    comments = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)

    # Purchaser side
    status = serializers.ChoiceField(choices=RequestStatus.choices, required=False)
    checklist = ChecklistSerializer(required=False)
    purchaserNotes = serializers.CharField(source='purchaser_notes', required=False, allow_blank=True, trim_whitespace=False)
    completedAt = serializers.DateTimeField(source='completed_at', required=False, allow_null=True)


class ProcurementRequestCreateSerializer(ProcurementRequestInputSerializer):
    """Serializer for submitting a new request (multipart form or JSON)."""
    pass


class ProcurementRequestUpdateSerializer(ProcurementRequestInputSerializer):
    """
    Explicit partial-update structure for PATCH.

    Use with ``partial=True``. Fields outside this serializer (including
    read-only ones such as imagePath or createdAt) are rejected.
    """

    def validate(self, attrs):
        unknown = sorted(set(self.initial_data) - set(self.fields))
        if unknown:
            raise serializers.ValidationError({
                name: ['Unknown or read-only field.'] for name in unknown
            })
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class ProcurementRequestSerializer(serializers.ModelSerializer):
    """Main serializer for procurement requests."""

    itemNameEn = serializers.CharField(source='item_name_en', read_only=True)
    itemNameZh = serializers.CharField(source='item_name_zh', read_only=True)
    estimatedPrice = serializers.CharField(source='estimated_price', read_only=True)
    dateNeeded = serializers.CharField(source='date_needed', read_only=True)
    requestorName = serializers.CharField(source='requestor_name', read_only=True)
    imagePath = serializers.CharField(source='image_path', read_only=True)
    checklist = ChecklistSerializer(source='*', read_only=True)
    purchaserNotes = serializers.CharField(source='purchaser_notes', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    completedAt = serializers.DateTimeField(source='completed_at', read_only=True)

    class Meta:
        model = ProcurementRequest
        fields = [
            'id',
            'itemNameEn',
            'itemNameZh',
            'category',
            'quantity',
            'unit',
            'estimatedPrice',
            'supplier',
            'priority',
            'dateNeeded',
            'requestorName',
            'department',
            'comments',
            'imagePath',
            'status',
            'checklist',
            'purchaserNotes',
            'createdAt',
            'updatedAt',
            'completedAt',
        ]
        read_only_fields = fields


class DeleteResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    details = serializers.DictField(required=False)
