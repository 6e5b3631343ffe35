"""Base class shared by the admin page controllers.

A page controller binds the generic record table to one backend collection:
it fetches the records, keeps them in a local cache, turns table callbacks
into REST calls and computes the summary cards shown above the table.
"""

from typing import Any, Dict, List, Optional, Type
import logging

from pydantic import BaseModel, ValidationError

from app.models.admin import StatCard
from app.models.table import ColumnDescriptor, FormField
from app.services.backend_service import BackendService, BackendServiceError, backend_service
from app.services.data_table import DataTable, RowLink

logger = logging.getLogger(__name__)


class RecordCache:
    """Best-effort local copy of a backend collection.

    The list is never mutated in place; every change installs a new list.
    """

    def __init__(self, id_field: str = "id"):
        self.id_field = id_field
        self._records: List[Dict[str, Any]] = []

    @property
    def records(self) -> List[Dict[str, Any]]:
        return self._records

    def replace(self, records: List[Dict[str, Any]]) -> None:
        self._records = list(records)

    def find(self, record_id: str) -> Optional[Dict[str, Any]]:
        for record in self._records:
            if str(record.get(self.id_field)) == str(record_id):
                return record
        return None

    def append(self, record: Dict[str, Any]) -> None:
        self.replace(self._records + [record])

    def swap(self, record_id: str, record: Dict[str, Any]) -> None:
        self.replace([
            record if str(r.get(self.id_field)) == str(record_id) else r
            for r in self._records
        ])

    def remove(self, record_id: str) -> None:
        self.replace([
            r for r in self._records if str(r.get(self.id_field)) != str(record_id)
        ])


class PageController:
    """
    Controller for one admin page backed by a REST collection.

    Subclasses declare the collection path, the record model, the table
    columns and the stats; the base class handles fetching, the cache and the
    add/update/delete round-trips.
    """

    title: str = ""
    description: str = ""
    table_title: str = ""
    path: str = ""
    slug: str = ""
    id_field: str = "id"
    model: Optional[Type[BaseModel]] = None
    supports_add: bool = True
    supports_update: bool = True
    # extra per-row actions: label, path suffix and an optional text input name
    row_actions: List[Dict[str, str]] = []

    def __init__(self, backend: Optional[BackendService] = None):
        self.backend = backend or backend_service
        self.cache = RecordCache(self.id_field)

    # -- declarations -----------------------------------------------------

    def columns(self) -> List[ColumnDescriptor]:
        raise NotImplementedError(f"{type(self).__name__}.columns not implemented")

    def form_fields(self) -> Optional[List[FormField]]:
        return None

    def stats(self, records: List[Dict[str, Any]]) -> List[StatCard]:
        return []

    def row_link(self) -> Optional[RowLink]:
        return None

    # -- records ----------------------------------------------------------

    def parse_record(self, data: Any) -> Dict[str, Any]:
        """Validate a backend record against the model; keep it as-is if it doesn't fit."""
        if self.model is None or not isinstance(data, dict):
            return data
        try:
            return self.model.model_validate(data).model_dump(
                mode="json", by_alias=True, exclude_unset=True
            )
        except ValidationError as e:
            logger.warning(f"Unexpected {self.slug} record shape, passing it through: {e}")
            return data

    def parse_records(self, data: Any) -> List[Dict[str, Any]]:
        if not isinstance(data, list):
            logger.warning(f"Expected a list of {self.slug}, got {type(data).__name__}")
            return []
        return [self.parse_record(item) for item in data]

    def prepare_new(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        """Payload for a create call; subclasses add server defaults."""
        return dict(draft)

    def prepare_update(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return dict(record)

    def find(self, record_id: str) -> Optional[Dict[str, Any]]:
        return self.cache.find(record_id)

    async def fetch_all(self) -> List[Dict[str, Any]]:
        """Reload the cache from the backend; an empty list if the call fails."""
        try:
            data = await self.backend.get(self.path)
            self.cache.replace(self.parse_records(data))
        except BackendServiceError as e:
            logger.error(f"Error fetching {self.slug}: {str(e)}")
            self.cache.replace([])
        return self.cache.records

    async def fetch_one(self, record_id: str) -> Optional[Dict[str, Any]]:
        record = self.find(record_id)
        if record is None:
            await self.fetch_all()
            record = self.find(record_id)
        return record

    async def add(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        """Create a record; the cache only changes once the backend accepted it."""
        payload = self.prepare_new(draft)
        try:
            created = await self.backend.post(self.path, payload)
        except BackendServiceError as e:
            logger.error(f"Error adding {self.slug}: {str(e)}")
            raise

        record = self.parse_record(created if isinstance(created, dict) else payload)
        self.cache.append(record)
        logger.info(f"Added {self.slug} record {record.get(self.id_field)}")
        return record

    async def update(self, record: Dict[str, Any]) -> Dict[str, Any]:
        record_id = record.get(self.id_field)
        if not record_id:
            raise ValueError(f"Error getting {self.slug} ID")

        payload = self.prepare_update(record)
        try:
            updated = await self.backend.put(f"{self.path}/{record_id}", payload)
        except BackendServiceError as e:
            logger.error(f"Error updating {self.slug} {record_id}: {str(e)}")
            raise

        result = self.parse_record(updated if isinstance(updated, dict) else payload)
        self.cache.swap(record_id, result)
        logger.info(f"Updated {self.slug} record {record_id}")
        return result

    async def delete(self, record: Dict[str, Any]) -> None:
        record_id = record.get(self.id_field)
        if not record_id:
            raise ValueError(f"Error getting {self.slug} ID")

        try:
            await self.backend.delete(f"{self.path}/{record_id}")
        except BackendServiceError as e:
            logger.error(f"Error deleting {self.slug} {record_id}: {str(e)}")
            raise

        self.cache.remove(record_id)
        logger.info(f"Deleted {self.slug} record {record_id}")

    def patch_cached(self, record_id: str, **changes) -> None:
        record = self.find(record_id)
        if record is not None:
            self.cache.swap(record_id, {**record, **changes})

    # -- table ------------------------------------------------------------

    def table(
        self, records: Optional[List[Dict[str, Any]]] = None, loading: bool = False
    ) -> DataTable:
        """A fresh table over the cached records; loading state belongs to the caller."""
        return DataTable(
            columns=self.columns(),
            records=self.cache.records if records is None else records,
            on_add=self.add if self.supports_add else None,
            on_update=self.update if self.supports_update else None,
            on_delete=self.delete,
            on_row_click=self.row_link(),
            form_fields=self.form_fields(),
            loading=loading,
            id_field=self.id_field,
        )
