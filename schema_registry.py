"""
Vertical Schema Registry

Maps survey ids to validated VerticalSchemas. Readers see a read-only table;
writers build a complete new table and swap it in with one assignment, so a
render in flight never observes a half-updated schema set.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from config import BriefConfig
from errors import ConfigurationError
from models import VerticalSchema

logger = logging.getLogger(__name__)

_Tables = Tuple[Mapping[str, VerticalSchema], Mapping[str, VerticalSchema]]


def _coerce(schemas: Iterable[Union[VerticalSchema, Mapping[str, Any]]]) -> List[VerticalSchema]:
    coerced: List[VerticalSchema] = []
    for item in schemas:
        if isinstance(item, VerticalSchema):
            coerced.append(item)
            continue
        try:
            coerced.append(VerticalSchema.model_validate(item))
        except ValidationError as exc:
            key = item.get("key") if isinstance(item, Mapping) else None
            raise ConfigurationError(f"Invalid vertical schema {key or '?'}: {exc}") from exc
    return coerced


def _build_tables(schemas: List[VerticalSchema]) -> _Tables:
    by_id: Dict[str, VerticalSchema] = {}
    by_key: Dict[str, VerticalSchema] = {}
    for schema in schemas:
        if schema.key in by_key:
            raise ConfigurationError(f"Vertical '{schema.key}' is declared twice")
        by_key[schema.key] = schema
        for survey_id in schema.survey_ids:
            if survey_id in by_id:
                raise ConfigurationError(
                    f"Survey id {survey_id} is claimed by both '{by_id[survey_id].key}' and '{schema.key}'"
                )
            by_id[survey_id] = schema
    return MappingProxyType(by_id), MappingProxyType(by_key)


class SchemaRegistry:
    """Survey id → VerticalSchema lookup with whole-table replacement."""

    def __init__(self, schemas: Iterable[Union[VerticalSchema, Mapping[str, Any]]] = ()):
        self._write_lock = threading.Lock()
        self._tables: _Tables = _build_tables(_coerce(schemas))

    def resolve(self, survey_id: Any) -> VerticalSchema:
        """Return the schema for a survey id; ConfigurationError when unknown."""
        if survey_id is None or (isinstance(survey_id, str) and not survey_id.strip()):
            raise ConfigurationError("Submission carries no survey_id")
        by_id, _ = self._tables
        schema = by_id.get(str(survey_id).strip())
        if schema is None:
            raise ConfigurationError(f"Unknown survey id: {survey_id}")
        return schema

    def get(self, key: str) -> VerticalSchema:
        _, by_key = self._tables
        schema = by_key.get(key)
        if schema is None:
            raise ConfigurationError(f"Unknown vertical: {key}")
        return schema

    def replace(self, schemas: Iterable[Union[VerticalSchema, Mapping[str, Any]]]) -> None:
        """Validate a full schema set and swap it in; the old table survives any error."""
        tables = _build_tables(_coerce(schemas))
        with self._write_lock:
            self._tables = tables
        logger.info("Schema registry now serves %d verticals", len(tables[1]))

    def load_file(self, path: Union[str, Path]) -> None:
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot read schema file {path}: {exc}") from exc
        if not isinstance(raw, list):
            raise ConfigurationError(f"Schema file {path} must hold a JSON list of verticals")
        self.replace(raw)

    @property
    def verticals(self) -> List[str]:
        return list(self._tables[1].keys())

    @property
    def survey_ids(self) -> List[str]:
        return list(self._tables[0].keys())

    def schemas(self) -> List[VerticalSchema]:
        return list(self._tables[1].values())

    def __contains__(self, survey_id: object) -> bool:
        return str(survey_id).strip() in self._tables[0]

    def __len__(self) -> int:
        return len(self._tables[1])


def default_registry(schema_file: Optional[str] = None) -> SchemaRegistry:
    """Registry seeded from the built-in catalog, or from BRIEF_SCHEMA_FILE when set."""
    from vertical_catalog import build_catalog

    registry = SchemaRegistry(build_catalog(BriefConfig.LOGO_BASE_URL))
    path = schema_file if schema_file is not None else BriefConfig.SCHEMA_FILE
    if path:
        logger.info("Loading vertical schemas from %s", path)
        registry.load_file(path)
    return registry


__all__ = ["SchemaRegistry", "default_registry"]
