"""Document list state with a local title filter."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from railway_directory.error_handler import ErrorHandler
from railway_directory.integrations import Document, DocumentsService
from railway_directory.state.base import AsyncState


class DocumentsState(AsyncState):
    fallback_error = "Failed to fetch documents. Please try again."

    def __init__(self, documents_service: DocumentsService, error_handler: Optional[ErrorHandler] = None) -> None:
        super().__init__(error_handler, loading=True)
        self.documents_service = documents_service
        self.documents: List[Document] = []
        self.search_query = ""

    async def load(self) -> None:
        token = self._begin()
        try:
            documents = await self.documents_service.get_documents()
        except Exception as exc:
            if self._fail(token, exc):
                self.documents = []
            return
        if self._finish(token):
            self.documents = documents

    def set_search_query(self, query: str) -> None:
        self.search_query = query or ""

    @property
    def filtered_documents(self) -> List[Document]:
        query = self.search_query.strip().lower()
        if not query:
            return list(self.documents)
        return [doc for doc in self.documents if query in doc.title.lower()]

    def snapshot(self) -> Dict[str, Any]:
        return {
            **super().snapshot(),
            "searchQuery": self.search_query,
            "documents": [doc.model_dump(by_alias=True) for doc in self.filtered_documents],
        }
