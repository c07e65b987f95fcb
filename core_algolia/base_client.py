"""
Request building shared by the sync and async clients

Every public operation maps to exactly one ``Operation``: the traffic mode,
the request to send, and the index name to inject into a successful
response (None for operations that don't carry one).
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from . import paths
from .config import AlgoliaConfig, get_algolia_config
from .constants import OBJECT_ID_ATTRIBUTE
from .types import (
    LogType, Mode, MultiQueryStrategy, Request, RequestOptions, Result, Success
)
from .utils import AlgoliaUtils, RecordLike


@dataclass(frozen=True)
class Operation:
    mode: Mode
    request: Request
    index_name: Optional[str] = None


def _options(request_options: Optional[Union[RequestOptions, Mapping[str, Any]]]) -> RequestOptions:
    if request_options is None:
        return RequestOptions()
    if isinstance(request_options, RequestOptions):
        return request_options
    return RequestOptions.from_dict(request_options)


def _request(
    method: str,
    path: str,
    body: Any = None,
    request_options: Optional[Union[RequestOptions, Mapping[str, Any]]] = None
) -> Request:
    return Request(
        method=method,
        path=path,
        body=AlgoliaUtils.encode(body) if body is not None else None,
        options=_options(request_options),
    )


def _replicas(forward_to_replicas: Optional[bool]) -> Dict[str, Any]:
    return {"forwardToReplicas": forward_to_replicas}


class BaseAlgoliaClient:
    """
    Base class for Algolia clients

    Subclasses own a dispatcher and run the operations built here.
    """

    def _resolve_config(
        self,
        application_id: Optional[str],
        api_key: Optional[str],
        config: Optional[AlgoliaConfig],
        **kwargs
    ) -> AlgoliaConfig:
        if config:
            return config
        return get_algolia_config(application_id=application_id, api_key=api_key, **kwargs)

    @staticmethod
    def _finish(operation: Operation, result: Result) -> Result:
        if operation.index_name is not None:
            return AlgoliaUtils.inject_index_name(result, operation.index_name)
        return result

    # ============= SEARCH OPERATIONS =============

    def _multi_op(self, queries, strategy=None, request_options=None) -> Operation:
        body = AlgoliaUtils.format_multi_queries(queries)
        path = paths.multiple_queries(MultiQueryStrategy(strategy) if strategy else None)
        return Operation(Mode.READ, _request("POST", path, body, request_options))

    def _search_op(self, index_name, query, params, request_options=None) -> Operation:
        path = paths.search(index_name, query, params)
        return Operation(Mode.READ, _request("GET", path, None, request_options))

    def _search_facet_op(self, index_name, facet, text, query=None, request_options=None) -> Operation:
        body = dict(query or {})
        body["facetQuery"] = text
        path = paths.search_facet(index_name, facet)
        return Operation(Mode.READ, _request("POST", path, body, request_options))

    # ============= OBJECT OPERATIONS =============

    def _get_object_op(self, index_name, object_id, request_options=None) -> Operation:
        object_id = AlgoliaUtils.validate_object_id(object_id)
        path = paths.record(index_name, object_id)
        return Operation(Mode.READ, _request("GET", path, None, request_options), index_name)

    def _add_object_op(self, index_name, obj: RecordLike, request_options=None) -> Operation:
        record = AlgoliaUtils.to_record(obj)
        path = paths.index(index_name)
        return Operation(Mode.WRITE, _request("POST", path, record.to_dict(), request_options), index_name)

    def _save_object_op(
        self,
        index_name,
        obj: RecordLike,
        object_id=None,
        id_attribute=None,
        request_options=None
    ) -> Operation:
        record = AlgoliaUtils.to_record(obj, id_attribute or OBJECT_ID_ATTRIBUTE)
        if object_id is None:
            object_id = AlgoliaUtils.require_object_id(record, id_attribute or OBJECT_ID_ATTRIBUTE)
            body = record.to_dict()
        else:
            object_id = AlgoliaUtils.validate_object_id(object_id)
            body = dict(record.attributes)

        path = paths.record(index_name, object_id)
        return Operation(Mode.WRITE, _request("PUT", path, body, request_options), index_name)

    def _batch_op(self, index_name, records, action, request_options=None) -> Operation:
        body = AlgoliaUtils.build_batch_request(records, action)
        path = paths.batch(index_name)
        return Operation(Mode.WRITE, _request("POST", path, body, request_options), index_name)

    def _add_objects_op(self, index_name, objects, request_options=None) -> Operation:
        records = AlgoliaUtils.build_records(objects)
        return self._batch_op(index_name, records, "addObject", request_options)

    def _save_objects_op(self, index_name, objects, id_attribute=None, request_options=None) -> Operation:
        records = AlgoliaUtils.build_records(objects, id_attribute)
        return self._batch_op(index_name, records, "updateObject", request_options)

    def _partial_update_object_op(
        self,
        index_name,
        obj: Mapping[str, Any],
        object_id,
        upsert=True,
        request_options=None
    ) -> Operation:
        object_id = AlgoliaUtils.validate_object_id(object_id)
        path = paths.partial_record(index_name, object_id, upsert)
        return Operation(Mode.WRITE, _request("POST", path, dict(obj), request_options), index_name)

    def _partial_update_objects_op(
        self,
        index_name,
        objects,
        upsert=True,
        id_attribute=None,
        request_options=None
    ) -> Operation:
        records = AlgoliaUtils.build_records(objects, id_attribute)
        action = "partialUpdateObject" if upsert else "partialUpdateObjectNoCreate"
        return self._batch_op(index_name, records, action, request_options)

    def _delete_object_op(self, index_name, object_id, request_options=None) -> Operation:
        object_id = AlgoliaUtils.validate_object_id(object_id)
        path = paths.record(index_name, object_id)
        return Operation(Mode.WRITE, _request("DELETE", path, None, request_options), index_name)

    def _delete_objects_op(self, index_name, object_ids: Iterable[Any], request_options=None) -> Operation:
        records = [
            AlgoliaUtils.to_record({OBJECT_ID_ATTRIBUTE: AlgoliaUtils.validate_object_id(object_id)})
            for object_id in object_ids
        ]
        return self._batch_op(index_name, records, "deleteObject", request_options)

    def _delete_by_op(self, index_name, filters, request_options=None) -> Operation:
        body = AlgoliaUtils.sanitize_delete_by_params(filters)
        path = paths.delete_by(index_name)
        return Operation(Mode.WRITE, _request("POST", path, body, request_options), index_name)

    # ============= INDEX OPERATIONS =============

    def _list_indexes_op(self, page=None, request_options=None) -> Operation:
        path = paths.indexes() + paths.to_query({"page": page})
        return Operation(Mode.READ, _request("GET", path, None, request_options))

    def _delete_index_op(self, index_name, request_options=None) -> Operation:
        path = paths.index(index_name)
        return Operation(Mode.WRITE, _request("DELETE", path, None, request_options), index_name)

    def _clear_index_op(self, index_name, request_options=None) -> Operation:
        path = paths.clear(index_name)
        return Operation(Mode.WRITE, _request("POST", path, None, request_options), index_name)

    def _get_settings_op(self, index_name, request_options=None) -> Operation:
        path = paths.settings(index_name)
        return Operation(Mode.READ, _request("GET", path, None, request_options), index_name)

    def _set_settings_op(self, index_name, settings, forward_to_replicas=None, request_options=None) -> Operation:
        path = paths.settings(index_name, _replicas(forward_to_replicas))
        return Operation(Mode.WRITE, _request("PUT", path, dict(settings), request_options), index_name)

    def _index_operation_op(self, operation, src_index, dst_index, request_options=None) -> Operation:
        body = {"operation": operation, "destination": dst_index}
        path = paths.operation(src_index)
        return Operation(Mode.WRITE, _request("POST", path, body, request_options), src_index)

    def _get_logs_op(self, offset=None, length=None, index_name=None, log_type=None, request_options=None) -> Operation:
        params = {
            "offset": offset,
            "length": length,
            "indexName": index_name,
            "type": LogType(log_type).value if log_type else None,
        }
        return Operation(Mode.WRITE, _request("GET", paths.logs(params), None, request_options))

    # ============= SYNONYM AND RULE OPERATIONS =============

    def _search_entries_op(self, search_path, query="", params=None, request_options=None) -> Operation:
        body = dict(params or {})
        body["query"] = query
        return Operation(Mode.READ, _request("POST", search_path, body, request_options))

    def _get_entry_op(self, entry_path, request_options=None) -> Operation:
        return Operation(Mode.READ, _request("GET", entry_path, None, request_options))

    def _write_entry_op(self, method, entry_path, index_name, body=None, request_options=None) -> Operation:
        return Operation(Mode.WRITE, _request(method, entry_path, body, request_options), index_name)

    def _search_synonyms_op(self, index_name, query="", params=None, request_options=None) -> Operation:
        return self._search_entries_op(paths.search_synonyms(index_name), query, params, request_options)

    def _get_synonym_op(self, index_name, object_id, request_options=None) -> Operation:
        object_id = AlgoliaUtils.validate_object_id(object_id)
        return self._get_entry_op(paths.synonym(index_name, object_id), request_options)

    def _save_synonym_op(self, index_name, synonym, forward_to_replicas=None, request_options=None) -> Operation:
        record = AlgoliaUtils.to_record(synonym)
        object_id = AlgoliaUtils.require_object_id(record)
        path = paths.synonym(index_name, object_id, _replicas(forward_to_replicas))
        return self._write_entry_op("PUT", path, index_name, record.to_dict(), request_options)

    def _delete_synonym_op(self, index_name, object_id, forward_to_replicas=None, request_options=None) -> Operation:
        object_id = AlgoliaUtils.validate_object_id(object_id)
        path = paths.synonym(index_name, object_id, _replicas(forward_to_replicas))
        return self._write_entry_op("DELETE", path, index_name, None, request_options)

    def _batch_synonyms_op(
        self,
        index_name,
        synonyms,
        forward_to_replicas=None,
        replace_existing_synonyms=None,
        request_options=None
    ) -> Operation:
        params = {
            "forwardToReplicas": forward_to_replicas,
            "replaceExistingSynonyms": replace_existing_synonyms,
        }
        body = [dict(synonym) for synonym in synonyms]
        path = paths.batch_synonyms(index_name, params)
        return self._write_entry_op("POST", path, index_name, body, request_options)

    def _clear_synonyms_op(self, index_name, forward_to_replicas=None, request_options=None) -> Operation:
        path = paths.clear_synonyms(index_name, _replicas(forward_to_replicas))
        return self._write_entry_op("POST", path, index_name, None, request_options)

    def _search_rules_op(self, index_name, query="", params=None, request_options=None) -> Operation:
        return self._search_entries_op(paths.search_rules(index_name), query, params, request_options)

    def _get_rule_op(self, index_name, object_id, request_options=None) -> Operation:
        object_id = AlgoliaUtils.validate_object_id(object_id)
        return self._get_entry_op(paths.rule(index_name, object_id), request_options)

    def _save_rule_op(self, index_name, rule, forward_to_replicas=None, request_options=None) -> Operation:
        record = AlgoliaUtils.to_record(rule)
        object_id = AlgoliaUtils.require_object_id(record)
        path = paths.rule(index_name, object_id, _replicas(forward_to_replicas))
        return self._write_entry_op("PUT", path, index_name, record.to_dict(), request_options)

    def _delete_rule_op(self, index_name, object_id, forward_to_replicas=None, request_options=None) -> Operation:
        object_id = AlgoliaUtils.validate_object_id(object_id)
        path = paths.rule(index_name, object_id, _replicas(forward_to_replicas))
        return self._write_entry_op("DELETE", path, index_name, None, request_options)

    def _batch_rules_op(
        self,
        index_name,
        rules,
        forward_to_replicas=None,
        clear_existing_rules=None,
        request_options=None
    ) -> Operation:
        params = {
            "forwardToReplicas": forward_to_replicas,
            "clearExistingRules": clear_existing_rules,
        }
        body = [dict(rule) for rule in rules]
        path = paths.batch_rules(index_name, params)
        return self._write_entry_op("POST", path, index_name, body, request_options)

    def _clear_rules_op(self, index_name, forward_to_replicas=None, request_options=None) -> Operation:
        path = paths.clear_rules(index_name, _replicas(forward_to_replicas))
        return self._write_entry_op("POST", path, index_name, None, request_options)

    # ============= EXPORT =============

    @staticmethod
    def _collect_page(result: Result, hits_per_page: int) -> Tuple[List[Dict[str, Any]], bool]:
        """Return the page's hits and whether it was the last page"""
        body = result.body if isinstance(result, Success) and isinstance(result.body, dict) else {}
        hits = AlgoliaUtils.strip_highlights(body.get("hits", []))
        return hits, not hits or len(hits) < hits_per_page
