"""Unit tests for the attachment use cases

Tests cover:
- UploadAttachment: type, emptiness, size, count and storage limits
- DownloadAttachment: decoding, missing attachment, corrupted payload
- DeleteAttachment: removal and missing attachment
"""

import base64
import pytest
from datetime import datetime
from unittest.mock import AsyncMock

from src.app.use_cases.attachments import (
    UploadAttachment,
    DownloadAttachment,
    DeleteAttachment,
    UploadAttachmentCommandDTO,
)
from src.domain.file_attachment import FileAttachment


async def _return_same(invoice):
    return invoice


def _attachment(attachment_id: str, size: int = 10, data: str = None) -> FileAttachment:
    return FileAttachment(
        id=attachment_id,
        filename=f"{attachment_id}.pdf",
        size=size,
        content_type="application/pdf",
        data=data if data is not None else base64.b64encode(b"x" * size).decode("ascii"),
        uploaded_at=datetime(2024, 1, 2),
    )


def _upload(
    invoice_id: str,
    content: bytes = b"%PDF-1.4 test",
    content_type: str = "application/pdf",
    filename: str = "receipt.pdf",
) -> UploadAttachmentCommandDTO:
    return UploadAttachmentCommandDTO(
        invoice_id=invoice_id,
        filename=filename,
        content_type=content_type,
        content=content,
    )


@pytest.fixture
def invoice(make_invoice):
    return make_invoice("INV-001")


@pytest.fixture
def upload_use_case(mock_uow, mock_invoice_repo, invoice):
    mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
    mock_invoice_repo.update = AsyncMock(side_effect=_return_same)
    return UploadAttachment(
        mock_uow,
        mock_invoice_repo,
        max_file_size=100,
        max_attachments=2,
        max_total_size=200,
    )


@pytest.mark.asyncio
class TestUploadAttachment:
    """Test UploadAttachment use case"""

    async def test_upload_success(self, upload_use_case, invoice, mock_uow):
        """
        Given: An invoice without attachments
        When: A small PDF is uploaded with an unsafe filename
        Then: The file is stored base64 encoded under a sanitized name
        """
        # Act
        result = await upload_use_case.execute(
            _upload(invoice.id, content=b"hello", filename="re:ceipt?.pdf")
        )

        # Assert
        assert result.is_ok()
        assert result.value.filename == "receipt.pdf"
        assert result.value.size == 5
        assert result.value.content_type == "application/pdf"

        assert len(invoice.attachments) == 1
        assert invoice.attachments[0].data == base64.b64encode(b"hello").decode("ascii")
        mock_uow.commit.assert_called_once()

    async def test_missing_invoice(self, upload_use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await upload_use_case.execute(_upload("missing"))

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_unsupported_type(self, upload_use_case, invoice, mock_uow):
        result = await upload_use_case.execute(
            _upload(invoice.id, content_type="application/zip", filename="a.zip")
        )

        assert result.is_err()
        assert result.error.code == "UNSUPPORTED_FILE_TYPE"
        mock_uow.commit.assert_not_called()

    async def test_empty_file(self, upload_use_case, invoice):
        result = await upload_use_case.execute(_upload(invoice.id, content=b""))

        assert result.is_err()
        assert result.error.code == "EMPTY_FILE"

    async def test_file_too_large(self, upload_use_case, invoice):
        result = await upload_use_case.execute(_upload(invoice.id, content=b"x" * 101))

        assert result.is_err()
        assert result.error.code == "FILE_TOO_LARGE"

    async def test_file_at_size_limit_is_accepted(self, upload_use_case, invoice):
        result = await upload_use_case.execute(_upload(invoice.id, content=b"x" * 100))

        assert result.is_ok()

    async def test_attachment_count_limit(self, upload_use_case, invoice):
        invoice.attachments = [_attachment("a1"), _attachment("a2")]

        result = await upload_use_case.execute(_upload(invoice.id))

        assert result.is_err()
        assert result.error.code == "ATTACHMENT_LIMIT_EXCEEDED"

    async def test_storage_limit_counts_base64_overhead(self, upload_use_case, invoice):
        """90 stored bytes (120 encoded) plus 61 new bytes (82 encoded) exceeds 200"""
        invoice.attachments = [_attachment("a1", size=90)]

        result = await upload_use_case.execute(_upload(invoice.id, content=b"x" * 61))

        assert result.is_err()
        assert result.error.code == "STORAGE_LIMIT_EXCEEDED"

    async def test_repository_failure_rolls_back(self, upload_use_case, invoice, mock_invoice_repo, mock_uow):
        mock_invoice_repo.update = AsyncMock(side_effect=RuntimeError("db gone"))

        result = await upload_use_case.execute(_upload(invoice.id))

        assert result.is_err()
        assert result.error.code == "UPLOAD_ATTACHMENT_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestDownloadAttachment:
    """Test DownloadAttachment use case"""

    async def test_download_decodes_content(self, mock_invoice_repo, invoice):
        invoice.attachments = [_attachment("a1", size=4)]
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await DownloadAttachment(mock_invoice_repo).execute(invoice.id, "a1")

        assert result.is_ok()
        assert result.value.content == b"xxxx"
        assert result.value.filename == "a1.pdf"
        assert result.value.content_type == "application/pdf"

    async def test_unknown_attachment(self, mock_invoice_repo, invoice):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await DownloadAttachment(mock_invoice_repo).execute(invoice.id, "nope")

        assert result.is_err()
        assert result.error.code == "ATTACHMENT_NOT_FOUND"

    async def test_unknown_invoice(self, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await DownloadAttachment(mock_invoice_repo).execute("missing", "a1")

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_corrupted_payload(self, mock_invoice_repo, invoice):
        invoice.attachments = [_attachment("a1", data="not base64!!")]
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await DownloadAttachment(mock_invoice_repo).execute(invoice.id, "a1")

        assert result.is_err()
        assert result.error.code == "CORRUPTED_ATTACHMENT"


@pytest.mark.asyncio
class TestDeleteAttachment:
    """Test DeleteAttachment use case"""

    async def test_delete_removes_only_that_attachment(
        self, mock_uow, mock_invoice_repo, invoice
    ):
        invoice.attachments = [_attachment("a1"), _attachment("a2")]
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_invoice_repo.update = AsyncMock(side_effect=_return_same)

        result = await DeleteAttachment(mock_uow, mock_invoice_repo).execute(invoice.id, "a1")

        assert result.is_ok()
        assert [attachment.id for attachment in invoice.attachments] == ["a2"]
        mock_uow.commit.assert_called_once()

    async def test_delete_unknown_attachment(self, mock_uow, mock_invoice_repo, invoice):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_invoice_repo.update = AsyncMock()

        result = await DeleteAttachment(mock_uow, mock_invoice_repo).execute(invoice.id, "nope")

        assert result.is_err()
        assert result.error.code == "ATTACHMENT_NOT_FOUND"
        mock_invoice_repo.update.assert_not_called()
