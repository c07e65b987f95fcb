"""
Utility functions for Algolia payloads
"""
import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from . import paths
from .constants import (
    DELETE_BY_IGNORED_PARAMS, INDEX_NAME_ATTRIBUTE, OBJECT_ID_ATTRIBUTE
)
from .exceptions import InvalidObjectIDError, ValidationError
from .types import Record, Result, Success


RecordLike = Union[Record, Mapping[str, Any]]


class AlgoliaUtils:
    """Utility class for building Algolia payloads"""

    @staticmethod
    def encode(value: Any) -> str:
        """Serialize a payload to JSON"""
        return json.dumps(value, default=str)

    @staticmethod
    def validate_object_id(object_id: Any, field: str = "object_id") -> str:
        """
        Reject empty object ids

        Raises:
            InvalidObjectIDError: If the id is None or empty
        """
        if object_id is None or str(object_id) == "":
            raise InvalidObjectIDError(field)
        return str(object_id)

    @staticmethod
    def to_record(obj: RecordLike, id_attribute: str = OBJECT_ID_ATTRIBUTE) -> Record:
        """Coerce a mapping or Record into a Record"""
        if isinstance(obj, Record):
            return obj
        if not isinstance(obj, Mapping):
            raise ValidationError(
                f"Expected a mapping or Record, got {type(obj).__name__}", "object"
            )
        return Record.from_mapping(obj, id_attribute)

    @staticmethod
    def require_object_id(record: Record, id_attribute: str = OBJECT_ID_ATTRIBUTE) -> str:
        """
        Return the record's id, failing if it has none

        Raises:
            ValidationError: If the record has no identifier
        """
        if record.object_id is None:
            if id_attribute == OBJECT_ID_ATTRIBUTE:
                raise ValidationError(
                    "Your object must have an objectID to be saved", "objectID"
                )
            raise ValidationError(
                f"Your object does not have a '{id_attribute}' attribute", id_attribute
            )
        return AlgoliaUtils.validate_object_id(record.object_id, id_attribute)

    @staticmethod
    def build_records(
        objects: Iterable[RecordLike],
        id_attribute: Optional[str] = None
    ) -> List[Record]:
        """
        Coerce objects to records

        When ``id_attribute`` names an attribute other than objectID, every
        object must carry it.
        """
        attribute = id_attribute or OBJECT_ID_ATTRIBUTE
        records = [AlgoliaUtils.to_record(obj, attribute) for obj in objects]

        if attribute != OBJECT_ID_ATTRIBUTE:
            for record in records:
                AlgoliaUtils.require_object_id(record, attribute)

        return records

    @staticmethod
    def build_batch_request(records: Iterable[Record], action: str) -> Dict[str, Any]:
        """Build the body of a batch request"""
        requests = []
        for record in records:
            request = {"action": action, "body": record.to_dict()}
            if record.object_id is not None:
                request[OBJECT_ID_ATTRIBUTE] = record.object_id
            requests.append(request)
        return {"requests": requests}

    @staticmethod
    def format_multi_queries(queries: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Format queries for the multiple queries endpoint

        Each query needs an ``index_name``; the remaining keys are sent as
        url-encoded search params.
        """
        requests = []
        for query in queries:
            index_name = query.get("index_name")
            if not index_name:
                raise ValidationError(
                    "Missing index_name for one of the multiple queries", "index_name"
                )

            params = {key: value for key, value in query.items() if key != "index_name"}
            requests.append({
                "indexName": index_name,
                "params": paths.encode_params(params),
            })
        return {"requests": requests}

    @staticmethod
    def sanitize_delete_by_params(params: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Drop parameters ignored by deleteByQuery

        Raises:
            ValidationError: If no filter is left
        """
        sanitized = {
            key: value for key, value in params.items()
            if key not in DELETE_BY_IGNORED_PARAMS
        }
        if not sanitized:
            raise ValidationError(
                "filters are required, use clear_index to wipe the index", "filters"
            )
        return sanitized

    @staticmethod
    def inject_index_name(result: Result, index_name: str) -> Result:
        """Add indexName to a successful response so it can be waited on"""
        if isinstance(result, Success) and isinstance(result.body, dict):
            return Success({**result.body, INDEX_NAME_ATTRIBUTE: index_name})
        return result

    @staticmethod
    def strip_highlights(hits: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Remove highlight metadata from exported hits"""
        return [
            {key: value for key, value in hit.items() if key != "_highlightResult"}
            for hit in hits
        ]
