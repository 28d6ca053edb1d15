from datetime import timedelta

from django.db import models
from django.utils import timezone
import uuid


class Category(models.TextChoices):
    EQUIPMENT = 'Equipment', 'Equipment'
    INGREDIENT = 'Ingredient', 'Ingredient'
    CONSUMABLE = 'Consumable', 'Consumable'
    CLEANING = 'Cleaning', 'Cleaning'
    OTHER = 'Other', 'Other'


class Priority(models.TextChoices):
    LOW = 'Low', 'Low'
    HIGH = 'High', 'High'
    URGENT = 'Urgent', 'Urgent'


class RequestStatus(models.TextChoices):
    PENDING = 'Pending', 'Pending'
    DONE = 'Done', 'Done'
    APPROVED = 'Approved', 'Approved'
    ORDERED = 'Ordered', 'Ordered'
    RECEIVED = 'Received', 'Received'
    CANCELLED = 'Cancelled', 'Cancelled'


# Purchasing checklist flags, in workflow order
CHECKLIST_FIELDS = (
    'quote_obtained',
    'manager_approved',
    'order_placed',
    'payment_processed',
    'item_received',
    'invoice_filed',
)


class ProcurementRequest(models.Model):
    """A kitchen purchase request and its purchasing progress."""

    TRIMMED_FIELDS = ('item_name_en', 'item_name_zh', 'requestor_name')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Item details
    item_name_en = models.CharField(max_length=200)
    item_name_zh = models.CharField(max_length=200, blank=True, default='')
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.EQUIPMENT)
    quantity = models.CharField(max_length=100, blank=True, default='')
    unit = models.CharField(max_length=50, blank=True, default='')
    estimated_price = models.CharField(max_length=100, blank=True, default='')
    supplier = models.CharField(max_length=200, blank=True, default='')
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.LOW)
    date_needed = models.CharField(max_length=50, blank=True, default='')

    # Requester info
    requestor_name = models.CharField(max_length=200)
    department = models.CharField(max_length=200, blank=True, default='')
    comments = models.TextField(blank=True, default='')

    # Relative /uploads/ path or absolute URL of the attached photo
    image_path = models.CharField(max_length=500, blank=True, default='')

    # Status & purchaser checklist
    status = models.CharField(max_length=20, choices=RequestStatus.choices, default=RequestStatus.PENDING)
    quote_obtained = models.BooleanField(default=False)
    manager_approved = models.BooleanField(default=False)
    order_placed = models.BooleanField(default=False)
    payment_processed = models.BooleanField(default=False)
    item_received = models.BooleanField(default=False)
    invoice_filed = models.BooleanField(default=False)
    purchaser_notes = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'procurement_requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='procurement_status_idx'),
            models.Index(fields=['priority'], name='procurement_priority_idx'),
            models.Index(fields=['category'], name='procurement_category_idx'),
            models.Index(fields=['created_at'], name='procurement_created_idx'),
        ]

    def __str__(self):
        return f"{self.item_name_en} ({self.requestor_name}) - {self.status}"

    def clean_fields(self, exclude=None):
        for field in self.TRIMMED_FIELDS:
            value = getattr(self, field)
            if isinstance(value, str):
                setattr(self, field, value.strip())
        super().clean_fields(exclude=exclude)

    @property
    def checklist(self):
        return {field: getattr(self, field) for field in CHECKLIST_FIELDS}

    def touch(self):
        """Refresh updated_at, always moving it forward."""
        now = timezone.now()
        if self.updated_at and now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now
