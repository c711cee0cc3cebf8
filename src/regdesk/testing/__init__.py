"""Testing utilities for regdesk applications.

Usage::

    from regdesk.testing import TestClient, multipart_body

    async def test_form():
        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
"""

from regdesk.testing.client import TestClient
from regdesk.testing.forms import UploadPart, multipart_body, urlencoded_body

__all__ = ["TestClient", "UploadPart", "multipart_body", "urlencoded_body"]
