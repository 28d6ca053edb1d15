"""
Procurement App - Kitchen Procurement Request Tracking

Staff submit requests for equipment, ingredients and consumables (optionally
with a photo); purchasers track each request through its status and a fixed
checklist of purchasing steps.

Architecture:
- Models: ProcurementRequest
- Services: request management, request search, image storage
- Views: RESTful API with a ViewSet under /api/requests
- Exceptions: Domain exception hierarchy (services/exceptions.py)
"""

__version__ = '0.1.0'
