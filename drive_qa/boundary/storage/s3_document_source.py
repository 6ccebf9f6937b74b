"""
S3-backed document source.

Treats the objects under a bucket prefix as the user's drive: lists them as
documents and extracts their text. Plain-text objects are decoded as UTF-8,
PDFs are parsed with LangChain's PyPDFLoader, DOCX files with Docx2txtLoader,
and anything else yields a placeholder string that the indexer skips.

Dependencies: boto3, langchain_community.document_loaders
System role: Document source for the indexing pipeline (S3 drive)
"""

import asyncio
import logging
import mimetypes
import os
import tempfile
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader

from drive_qa.core.exceptions import DocumentSourceError
from drive_qa.core.indexing.content_filters import is_indexable_mime_type
from drive_qa.models.document import DocumentInfo

logger = logging.getLogger(__name__)

_GENERIC_CONTENT_TYPES = {"", "binary/octet-stream", "application/octet-stream"}
_TEXT_APPLICATION_TYPES = {
    "application/json",
    "application/xml",
    "application/csv",
    "application/javascript",
    "application/x-javascript",
    "application/markdown",
    "application/yaml",
    "application/x-yaml",
    "application/x-ndjson",
}
_DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _is_text_like(mime_type: str) -> bool:
    if mime_type.startswith("text/") or mime_type in _TEXT_APPLICATION_TYPES:
        return True
    # Structured syntax suffixes, e.g. application/ld+json or application/atom+xml
    return mime_type.startswith("application/") and mime_type.endswith(("+json", "+xml"))


class S3DocumentSource:
    """
    Document source over an S3 bucket prefix.

    Document ids are object keys; document names are the key's file name.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "ap-southeast-2",
        prefix: str = "",
        s3_client: Any | None = None,
    ) -> None:
        """
        Initialize S3 document source.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            prefix: Only keys under this prefix are listed
            s3_client: Pre-built boto3 S3 client (created from region when None)
        """
        self._bucket = bucket
        self._region = region
        self._prefix = prefix
        self._s3_client = s3_client or boto3.client("s3", region_name=region)

    def _resolve_mime_type(self, key: str) -> str:
        content_type = ""
        try:
            head = self._s3_client.head_object(Bucket=self._bucket, Key=key)
            content_type = (head.get("ContentType") or "").split(";")[0].strip().lower()
        except ClientError as e:
            logger.warning(f"{__name__}:_resolve_mime_type - head_object failed for {key}: {e}")

        if content_type in _GENERIC_CONTENT_TYPES:
            guessed, _ = mimetypes.guess_type(key)
            content_type = guessed or "application/octet-stream"
        return content_type

    def _list_documents(self, max_count: int) -> list[DocumentInfo]:
        documents: list[DocumentInfo] = []
        if max_count < 1:
            return documents

        paginator = self._s3_client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=self._bucket, Prefix=self._prefix):
                for obj in page.get("Contents", []):
                    key = obj["Key"]
                    if key.endswith("/"):
                        continue
                    mime_type = self._resolve_mime_type(key)
                    if not is_indexable_mime_type(mime_type):
                        continue
                    documents.append(DocumentInfo(id=key, name=Path(key).name, mime_type=mime_type))
                    if len(documents) >= max_count:
                        return documents
        except (ClientError, BotoCoreError) as e:
            raise DocumentSourceError(
                f"Failed to list documents in s3://{self._bucket}/{self._prefix}",
                details={"error": str(e)},
            ) from e
        return documents

    async def list_indexable_documents(self, max_count: int) -> list[DocumentInfo]:
        """
        List up to max_count indexable documents under the prefix.

        Args:
            max_count: Maximum number of documents to return

        Returns:
            list[DocumentInfo]: Documents in listing order

        Raises:
            DocumentSourceError: When the bucket cannot be listed
        """
        documents = await asyncio.to_thread(self._list_documents, max_count)
        logger.info(f"{__name__}:list_indexable_documents - Listed {len(documents)} documents")
        return documents

    def _extract_pdf(self, key: str, body: bytes) -> str:
        with tempfile.TemporaryDirectory(prefix="drive_qa_") as temp_dir:
            local_path = os.path.join(temp_dir, Path(key).name or "document.pdf")
            with open(local_path, "wb") as f:
                f.write(body)
            pages = PyPDFLoader(local_path).load()

        text = "\n\n".join(page.page_content for page in pages if page.page_content.strip())
        return text or "[Content unavailable: PDF contains no extractable text]"

    def _extract_docx(self, key: str, body: bytes) -> str:
        with tempfile.TemporaryDirectory(prefix="drive_qa_") as temp_dir:
            local_path = os.path.join(temp_dir, Path(key).name or "document.docx")
            with open(local_path, "wb") as f:
                f.write(body)
            documents = Docx2txtLoader(local_path).load()

        text = "\n\n".join(doc.page_content.strip() for doc in documents if doc.page_content.strip())
        return text or "[Content unavailable: document contains no extractable text]"

    def _extract_text(self, key: str, mime_type: str) -> str:
        mime_type = (mime_type or "").split(";")[0].strip().lower()
        is_pdf = mime_type == "application/pdf"
        is_docx = mime_type == _DOCX_MIME_TYPE
        if not (is_pdf or is_docx or _is_text_like(mime_type)):
            return f"[Unsupported file type: {mime_type}]"

        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
            body = response["Body"].read()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                return f"[File not downloadable: {key}]"
            logger.error(f"{__name__}:_extract_text - Download failed for {key}: {e}")
            return f"[Error downloading file: {error_code}]"

        if is_pdf:
            try:
                return self._extract_pdf(key, body)
            except Exception as e:
                logger.error(f"{__name__}:_extract_text - PDF parsing failed for {key}: {type(e).__name__}: {e}")
                return f"[Error parsing PDF: {type(e).__name__}]"

        if is_docx:
            try:
                return self._extract_docx(key, body)
            except Exception as e:
                logger.error(f"{__name__}:_extract_text - DOCX parsing failed for {key}: {type(e).__name__}: {e}")
                return f"[Error parsing document: {type(e).__name__}]"

        return body.decode("utf-8", errors="replace")

    async def get_extracted_text(self, document_id: str, mime_type: str) -> str:
        """
        Return a document's text, or a placeholder string when it has none.

        Args:
            document_id: Object key
            mime_type: Document MIME type

        Returns:
            str: Extracted text or a bracketed placeholder
        """
        return await asyncio.to_thread(self._extract_text, document_id, mime_type)
