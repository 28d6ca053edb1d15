"""Procurement request search and filtering service."""

from django.db.models import Q, QuerySet
from typing import Optional

from ..models import ProcurementRequest


def search_requests(
    *,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> QuerySet[ProcurementRequest]:
    """
    Filter procurement requests, newest first.

    Args:
        status: Exact status match
        priority: Exact priority match
        category: Exact category match
        search: Case-insensitive substring matched against English name,
            Mandarin name, requestor name and department

    Returns:
        QuerySet of ProcurementRequest ordered by created_at descending
    """
    queryset = ProcurementRequest.objects.all()

    if status:
        queryset = queryset.filter(status=status)

    if priority:
        queryset = queryset.filter(priority=priority)

    if category:
        queryset = queryset.filter(category=category)

    if search:
        queryset = queryset.filter(
            Q(item_name_en__icontains=search) |
            Q(item_name_zh__icontains=search) |
            Q(requestor_name__icontains=search) |
            Q(department__icontains=search)
        )

    return queryset.order_by('-created_at')
