"""Integration tests for Attachment API endpoints

The integration config limits files to 1 KB, three attachments and 3000 bytes of
stored data per invoice.
"""

import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from httpx import AsyncClient

from src.api.routes import attachments as attachment_routes

API = "/api/invoices"


@pytest_asyncio.fixture
async def invoice(client: AsyncClient) -> dict:
    response = await client.post(
        API,
        json={
            "invoice_number": "INV-ATT-1",
            "issue_date": "2024-01-15",
            "customer_name": "Jane Roe",
            "line_items": [{"description": "Consulting", "quantity": 1, "unit_price": 100}],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


async def upload(client: AsyncClient, invoice_id: str, filename="receipt.pdf",
                 content=b"%PDF-1.4 receipt", content_type="application/pdf"):
    return await client.post(
        f"{API}/{invoice_id}/attachments",
        files={"file": (filename, content, content_type)},
    )


class TestAttachmentAPI:
    """Upload, download and delete attachments over HTTP"""

    @pytest.mark.asyncio
    async def test_upload_and_download(self, client: AsyncClient, invoice):
        # Act
        response = await upload(client, invoice["invoice_id"], filename="my:receipt?.pdf")

        # Assert upload
        assert response.status_code == 201
        attachment = response.json()
        assert attachment["filename"] == "myreceipt.pdf"
        assert attachment["size"] == len(b"%PDF-1.4 receipt")
        assert attachment["content_type"] == "application/pdf"

        fetched = (await client.get(f"{API}/{invoice['invoice_id']}")).json()
        assert [a["id"] for a in fetched["attachments"]] == [attachment["id"]]

        # Assert download
        download = await client.get(f"{API}/{invoice['invoice_id']}/attachments/{attachment['id']}")
        assert download.status_code == 200
        assert download.content == b"%PDF-1.4 receipt"
        assert download.headers["content-type"] == "application/pdf"
        assert "myreceipt.pdf" in download.headers["content-disposition"]

    @pytest.mark.asyncio
    async def test_non_ascii_filename_download(self, client: AsyncClient, invoice):
        uploaded = (await upload(client, invoice["invoice_id"], filename="reçu.txt",
                                 content=b"merci", content_type="text/plain")).json()

        download = await client.get(f"{API}/{invoice['invoice_id']}/attachments/{uploaded['id']}")

        assert download.status_code == 200
        assert "filename*=UTF-8''re%C3%A7u.txt" in download.headers["content-disposition"]

    @pytest.mark.asyncio
    async def test_unsupported_type_returns_400(self, client: AsyncClient, invoice):
        response = await upload(client, invoice["invoice_id"], filename="a.zip",
                                content=b"PK", content_type="application/zip")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNSUPPORTED_FILE_TYPE"

    @pytest.mark.asyncio
    async def test_empty_file_returns_400(self, client: AsyncClient, invoice):
        response = await upload(client, invoice["invoice_id"], content=b"")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMPTY_FILE"

    @pytest.mark.asyncio
    async def test_too_large_file_returns_413(self, client: AsyncClient, invoice):
        response = await upload(client, invoice["invoice_id"], content=b"x" * 1025)

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "FILE_TOO_LARGE"

    @pytest.mark.asyncio
    async def test_too_large_file_rejected_before_upload(
        self, client: AsyncClient, invoice, monkeypatch
    ):
        """Oversized files are refused from their declared size; the upload never runs"""
        # Arrange
        upload_use_case = MagicMock()
        monkeypatch.setattr(attachment_routes, "UploadAttachment", upload_use_case)

        # Act
        response = await upload(client, invoice["invoice_id"], content=b"x" * 4096)

        # Assert
        assert response.status_code == 413
        error = response.json()["error"]
        assert error["code"] == "FILE_TOO_LARGE"
        assert error["message"] == "File size exceeds 1.0 KB limit"
        upload_use_case.assert_not_called()

    @pytest.mark.asyncio
    async def test_attachment_count_limit(self, client: AsyncClient, invoice):
        for _ in range(3):
            assert (await upload(client, invoice["invoice_id"])).status_code == 201

        response = await upload(client, invoice["invoice_id"])

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ATTACHMENT_LIMIT_EXCEEDED"

    @pytest.mark.asyncio
    async def test_storage_limit_returns_413(self, client: AsyncClient, invoice):
        # Two 1 KB files take 2 * 1362 stored bytes; a third one passes 3000
        for _ in range(2):
            assert (await upload(client, invoice["invoice_id"], content=b"x" * 1024)).status_code == 201

        response = await upload(client, invoice["invoice_id"], content=b"x" * 1024)

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "STORAGE_LIMIT_EXCEEDED"

    @pytest.mark.asyncio
    async def test_upload_to_missing_invoice_returns_404(self, client: AsyncClient):
        response = await upload(client, "does-not-exist")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_attachment(self, client: AsyncClient, invoice):
        uploaded = (await upload(client, invoice["invoice_id"])).json()

        response = await client.delete(f"{API}/{invoice['invoice_id']}/attachments/{uploaded['id']}")

        assert response.status_code == 204
        fetched = (await client.get(f"{API}/{invoice['invoice_id']}")).json()
        assert fetched["attachments"] == []

    @pytest.mark.asyncio
    async def test_download_unknown_attachment_returns_404(self, client: AsyncClient, invoice):
        response = await client.get(f"{API}/{invoice['invoice_id']}/attachments/nope")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ATTACHMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_deleting_invoice_removes_attachments(self, client: AsyncClient, invoice):
        uploaded = (await upload(client, invoice["invoice_id"])).json()

        assert (await client.delete(f"{API}/{invoice['invoice_id']}")).status_code == 204

        response = await client.get(f"{API}/{invoice['invoice_id']}/attachments/{uploaded['id']}")
        assert response.status_code == 404
