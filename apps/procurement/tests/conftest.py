import pytest
from datetime import timedelta
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from rest_framework.test import APIClient
from apps.procurement.models import ProcurementRequest, Category, Priority, RequestStatus
from apps.procurement.services import ImageStorageConfig, LocalImageStorage


# Smallest valid PNG (1x1 transparent pixel)
PNG_BYTES = (
    b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01'
    b'\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f'
    b'\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82'
)


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploaded images in a per-test temporary directory."""
    upload_dir = tmp_path / 'uploads'
    upload_dir.mkdir()
    settings.MEDIA_ROOT = upload_dir
    settings.IMAGE_STORAGE_BACKEND = 'local'
    settings.IMAGE_UPLOAD_MAX_BYTES = 1024 * 1024
    return upload_dir


@pytest.fixture
def api_client():
    """Return an API client (the API needs no authentication)."""
    return APIClient()


@pytest.fixture
def local_storage(media_root):
    """Local image storage writing into the temporary media root."""
    return LocalImageStorage(ImageStorageConfig(
        backend='local',
        max_bytes=1024 * 1024,
        upload_dir=str(media_root),
        upload_url='/uploads/',
    ))


@pytest.fixture
def png_upload():
    """Return a small PNG upload."""
    return SimpleUploadedFile('fresh chicken (1).png', PNG_BYTES, content_type='image/png')


@pytest.fixture
def text_upload():
    """Return a non-image upload."""
    return SimpleUploadedFile('notes.txt', b'not an image', content_type='text/plain')


def _make_request(minutes_ago, **fields):
    created = timezone.now() - timedelta(minutes=minutes_ago)
    fields.setdefault('requestor_name', 'Amy')
    return ProcurementRequest.objects.create(created_at=created, updated_at=created, **fields)


@pytest.fixture
def olive_oil_request(db):
    """Pending, urgent ingredient request."""
    return _make_request(
        30,
        item_name_en='Olive Oil',
        item_name_zh='橄榄油',
        category=Category.INGREDIENT,
        priority=Priority.URGENT,
        quantity='5',
        unit='L',
        department='Hot Kitchen',
    )


@pytest.fixture
def chicken_request(db):
    """Pending, high priority ingredient request mentioning chicken."""
    return _make_request(
        20,
        item_name_en='Chicken Thighs',
        category=Category.INGREDIENT,
        priority=Priority.HIGH,
        requestor_name='Ben',
        department='Butchery',
    )


@pytest.fixture
def approved_request(db):
    """Approved high priority equipment request."""
    return _make_request(
        10,
        item_name_en='Stock Pot',
        priority=Priority.HIGH,
        status=RequestStatus.APPROVED,
        requestor_name='Chloe',
        department='Chicken Station',
        manager_approved=True,
    )


@pytest.fixture
def cleaning_request(db):
    """Low priority cleaning request, newest of the set."""
    return _make_request(
        1,
        item_name_en='Degreaser',
        category=Category.CLEANING,
        requestor_name='Dan',
        department='Dish Pit',
    )


@pytest.fixture
def request_set(olive_oil_request, chicken_request, approved_request, cleaning_request):
    """All fixture requests, oldest first."""
    return [olive_oil_request, chicken_request, approved_request, cleaning_request]
