import json
import logging
from collections.abc import Mapping

from rest_framework import viewsets, status
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    ProcurementRequestSerializer,
    ProcurementRequestCreateSerializer,
    ProcurementRequestUpdateSerializer,
    ProcurementRequestFilterSerializer,
    DeleteResponseSerializer,
    ErrorResponseSerializer,
)
from .services import (
    create_request,
    get_request_by_id,
    update_request,
    delete_request,
    search_requests,
    get_image_storage,
    RequestNotFoundError,
    RequestValidationError,
    ImageStorageError,
)

logger = logging.getLogger(__name__)

IMAGE_FIELD = 'image'


def _error_response(error, http_status):
    body = {'error': str(error)}
    errors = getattr(error, 'errors', None)
    if errors:
        body['details'] = errors
    return Response(body, status=http_status)


def _parse_checklist(raw):
    """
    Decode a checklist sent as JSON text in a form field.

    Malformed text is tolerated: the checklist is dropped and the request is
    created with every flag false.
    """
    if not isinstance(raw, str):
        return raw
    try:
        value = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed checklist text: %r", raw)
        return None
    if not isinstance(value, dict):
        logger.debug("Ignoring non-object checklist: %r", raw)
        return None
    return value


def _submission_data(data):
    """Copy form/JSON input into a plain dict, without the image part."""
    if not isinstance(data, Mapping):
        # Left for the serializer to reject as invalid data
        return data
    submission = {
        key: data.get(key)
        for key in data.keys()
        if key != IMAGE_FIELD
    }
    if 'checklist' in submission:
        checklist = _parse_checklist(submission['checklist'])
        if checklist is None:
            del submission['checklist']
        else:
            submission['checklist'] = checklist
    return submission


class ProcurementRequestViewSet(viewsets.ModelViewSet):
    """
    ViewSet for procurement requests.

    list: All requests, newest first (filter by status/priority/category/search)
    create: Submit a request, optionally with an image file
    retrieve: Get one request
    partial_update: Update status, checklist, notes or any other editable field
    destroy: Delete a request and its image
    """

    serializer_class = ProcurementRequestSerializer
    pagination_class = None
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        """Filter requests using input serializer validation."""
        filter_serializer = ProcurementRequestFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_requests(
            status=params.get('status'),
            priority=params.get('priority'),
            category=params.get('category'),
            search=params.get('search'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'create':
            return ProcurementRequestCreateSerializer
        elif self.action == 'partial_update':
            return ProcurementRequestUpdateSerializer
        return ProcurementRequestSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, description='Exact status match'),
            OpenApiParameter('priority', str, description='Exact priority match'),
            OpenApiParameter('category', str, description='Exact category match'),
            OpenApiParameter('search', str, description='Case-insensitive search in names and department'),
        ],
        responses={200: ProcurementRequestSerializer(many=True), 400: ErrorResponseSerializer},
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=ProcurementRequestCreateSerializer,
        responses={201: ProcurementRequestSerializer, 400: ErrorResponseSerializer},
        description="Submit a procurement request. Send multipart/form-data to attach "
                    "an 'image' file; 'checklist' may be a JSON-encoded text field.",
    )
    def create(self, request, *args, **kwargs):
        """Create a new procurement request."""
        serializer = self.get_serializer(data=_submission_data(request.data))
        serializer.is_valid(raise_exception=True)

        storage = None
        image_path = ''
        upload = request.FILES.get(IMAGE_FIELD)

        if upload is not None:
            try:
                storage = get_image_storage()
                image_path = storage.store(
                    content=upload,
                    original_name=upload.name,
                    content_type=upload.content_type,
                )
            except RequestValidationError as e:
                return _error_response(e, status.HTTP_400_BAD_REQUEST)
            except ImageStorageError as e:
                logger.error("Image upload failed: %s", e)
                return _error_response(e, status.HTTP_500_INTERNAL_SERVER_ERROR)

        try:
            procurement_request = create_request(
                image_path=image_path,
                **serializer.validated_data
            )
        except RequestValidationError as e:
            if storage is not None:
                storage.delete(image_path)
            return _error_response(e, status.HTTP_400_BAD_REQUEST)
        except Exception:
            if storage is not None:
                storage.delete(image_path)
            raise

        output_serializer = ProcurementRequestSerializer(procurement_request)
        return Response(
            output_serializer.data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: ProcurementRequestSerializer, 404: ErrorResponseSerializer})
    def retrieve(self, request, *args, **kwargs):
        """Get a single procurement request."""
        try:
            procurement_request = get_request_by_id(request_id=kwargs.get('pk'))
        except RequestNotFoundError as e:
            return _error_response(e, status.HTTP_404_NOT_FOUND)

        return Response(ProcurementRequestSerializer(procurement_request).data)

    @extend_schema(
        request=ProcurementRequestUpdateSerializer,
        responses={
            200: ProcurementRequestSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def partial_update(self, request, *args, **kwargs):
        """Merge the given fields into a procurement request."""
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            procurement_request = update_request(
                request_id=kwargs.get('pk'),
                data=serializer.validated_data,
            )
        except RequestNotFoundError as e:
            return _error_response(e, status.HTTP_404_NOT_FOUND)
        except RequestValidationError as e:
            return _error_response(e, status.HTTP_400_BAD_REQUEST)

        return Response(ProcurementRequestSerializer(procurement_request).data)

    @extend_schema(responses={200: DeleteResponseSerializer, 404: ErrorResponseSerializer})
    def destroy(self, request, *args, **kwargs):
        """Delete a procurement request, then its image (best-effort)."""
        try:
            procurement_request = delete_request(request_id=kwargs.get('pk'))
        except RequestNotFoundError as e:
            return _error_response(e, status.HTTP_404_NOT_FOUND)

        if procurement_request.image_path:
            get_image_storage().delete(procurement_request.image_path)

        return Response({'ok': True})
