"""Procurement request CRUD operations service."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from ..models import CHECKLIST_FIELDS, ProcurementRequest
from .exceptions import RequestNotFoundError, RequestValidationError

logger = logging.getLogger(__name__)

# Fields a caller may set on create or update (besides the checklist)
EDITABLE_FIELDS = (
    'item_name_en',
    'item_name_zh',
    'category',
    'quantity',
    'unit',
    'estimated_price',
    'supplier',
    'priority',
    'date_needed',
    'requestor_name',
    'department',
    'comments',
    'status',
    'purchaser_notes',
    'completed_at',
)


def _validate(procurement_request: ProcurementRequest) -> None:
    try:
        procurement_request.full_clean()
    except ValidationError as e:
        errors = e.message_dict
        field, messages = next(iter(errors.items()))
        raise RequestValidationError(f"{field}: {messages[0]}", errors=errors)


def _apply_checklist(
    procurement_request: ProcurementRequest,
    checklist: Optional[Dict[str, bool]],
) -> None:
    if not checklist:
        return
    unknown = set(checklist) - set(CHECKLIST_FIELDS)
    if unknown:
        raise RequestValidationError(
            f"Unknown checklist item: {sorted(unknown)[0]}",
            errors={'checklist': [f"Unknown item '{name}'" for name in sorted(unknown)]},
        )
    for field, value in checklist.items():
        setattr(procurement_request, field, bool(value))


def _get_for_update(request_id: UUID) -> ProcurementRequest:
    try:
        return ProcurementRequest.objects.select_for_update().get(id=request_id)
    except (ProcurementRequest.DoesNotExist, ValidationError, ValueError):
        raise RequestNotFoundError(f"Procurement request {request_id} not found")


@transaction.atomic
def create_request(
    *,
    item_name_en: str,
    requestor_name: str,
    checklist: Optional[Dict[str, bool]] = None,
    image_path: str = '',
    **fields: Any
) -> ProcurementRequest:
    """
    Create a new procurement request.

    Args:
        item_name_en: English item name (required, trimmed)
        requestor_name: Who is asking (required, trimmed)
        checklist: Optional initial checklist flags, keyed by model field
        image_path: Path/URL returned by the image storage
        **fields: Any other editable field (category, priority, ...)

    Returns:
        Created ProcurementRequest instance

    Raises:
        RequestValidationError: If a required field is empty, an enum value
            is unknown or an unexpected field is passed
    """
    unexpected = set(fields) - set(EDITABLE_FIELDS)
    if unexpected:
        raise RequestValidationError(
            f"Unknown field: {sorted(unexpected)[0]}",
            errors={name: ['Unknown field.'] for name in sorted(unexpected)},
        )

    now = timezone.now()
    procurement_request = ProcurementRequest(
        item_name_en=item_name_en,
        requestor_name=requestor_name,
        image_path=image_path or '',
        created_at=now,
        updated_at=now,
        **fields
    )
    _apply_checklist(procurement_request, checklist)
    _validate(procurement_request)
    procurement_request.save()

    logger.info(
        "Created procurement request %s (%s) for %s",
        procurement_request.id,
        procurement_request.item_name_en,
        procurement_request.requestor_name,
    )
    return procurement_request


def get_request_by_id(*, request_id: UUID) -> ProcurementRequest:
    """
    Get procurement request by ID.

    Raises:
        RequestNotFoundError: If the request doesn't exist or the ID is malformed
    """
    try:
        return ProcurementRequest.objects.get(id=request_id)
    except (ProcurementRequest.DoesNotExist, ValidationError, ValueError):
        raise RequestNotFoundError(f"Procurement request {request_id} not found")


@transaction.atomic
def update_request(
    *,
    request_id: UUID,
    data: Dict[str, Any]
) -> ProcurementRequest:
    """
    Merge the provided fields into an existing request.

    Fields absent from ``data`` are left untouched; ``data['checklist']`` is
    merged flag by flag. ``updated_at`` always moves forward.

    Args:
        request_id: Request UUID
        data: Fields to update, keyed by model field name

    Returns:
        Updated ProcurementRequest instance

    Raises:
        RequestNotFoundError: If the request doesn't exist
        RequestValidationError: If a value is invalid or a field is not editable
    """
    procurement_request = _get_for_update(request_id)

    data = dict(data)
    checklist = data.pop('checklist', None)

    not_editable = set(data) - set(EDITABLE_FIELDS)
    if not_editable:
        raise RequestValidationError(
            f"Field cannot be updated: {sorted(not_editable)[0]}",
            errors={name: ['This field cannot be updated.'] for name in sorted(not_editable)},
        )

    for field, value in data.items():
        setattr(procurement_request, field, value)
    _apply_checklist(procurement_request, checklist)

    _validate(procurement_request)
    procurement_request.touch()
    procurement_request.save()

    logger.info(
        "Updated procurement request %s (%s)",
        procurement_request.id,
        ', '.join(sorted(data) + (['checklist'] if checklist else [])) or 'no fields',
    )
    return procurement_request


@transaction.atomic
def delete_request(*, request_id: UUID) -> ProcurementRequest:
    """
    Delete a procurement request.

    Returns:
        The deleted instance, so the caller can clean up its image

    Raises:
        RequestNotFoundError: If the request doesn't exist
    """
    procurement_request = _get_for_update(request_id)
    deleted_id = procurement_request.id
    procurement_request.delete()
    procurement_request.id = deleted_id

    logger.info("Deleted procurement request %s", deleted_id)
    return procurement_request
