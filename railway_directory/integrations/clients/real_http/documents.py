"""
Documents service.

Purpose:
- Fetches the document list from the external document source
- Normalises every record into the Document contract

Implementation notes:
- The document source is an absolute URL, independent of the directory API
  base URL; ApiClient passes absolute URLs through unchanged.
- The source evolves on its own schedule, so records are coerced field by
  field with "" fallbacks and both {data: [...]} and bare-list responses
  are accepted.
- When a title marker is configured, only documents whose title contains it
  (case-sensitive) are returned.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from railway_directory.integrations.clients.real_http.api_client import ApiClient
from railway_directory.integrations.contracts import Document
from railway_directory.integrations.response_wrappers import extract_count, normalize_document, unwrap_list

logger = logging.getLogger(__name__)


class DocumentsService:
    def __init__(
        self,
        api_client: ApiClient,
        documents_url: str,
        count_url: Optional[str] = None,
        title_marker: Optional[str] = None,
    ) -> None:
        if not documents_url:
            logger.warning("Document source URL is not set.")
        self.api_client = api_client
        self.documents_url = documents_url
        self.count_url = count_url or f"{documents_url.rstrip('/')}/count"
        self.title_marker = title_marker or None

    async def get_documents(self) -> List[Document]:
        if not self.documents_url:
            raise ValueError("DOCUMENTS_API_URL is not configured.")
        response = await self.api_client.get(self.documents_url)
        documents = [normalize_document(item) for item in unwrap_list(response)]
        if self.title_marker:
            documents = [doc for doc in documents if self.title_marker in doc.title]
        logger.debug("Fetched %d documents", len(documents))
        return documents

    async def get_documents_count(self) -> int:
        if not self.documents_url:
            raise ValueError("DOCUMENTS_API_URL is not configured.")
        response = await self.api_client.get(self.count_url)
        return extract_count(response)
