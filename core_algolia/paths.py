"""
URL paths for Algolia REST endpoints
"""
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote, urlencode

from .constants import API_VERSION
from .types import MultiQueryStrategy


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_encode_value(item) for item in value)
    return str(value)


def encode_params(params: Optional[Mapping[str, Any]] = None) -> str:
    """Url-encode params, skipping None values"""
    encoded = [
        (key, _encode_value(value))
        for key, value in (params or {}).items()
        if value is not None
    ]
    return urlencode(encoded)


def to_query(params: Optional[Mapping[str, Any]] = None) -> str:
    """Render params as a query string, empty when nothing is left"""
    encoded = encode_params(params)
    return "?" + encoded if encoded else ""


def indexes() -> str:
    return f"/{API_VERSION}/indexes"


def multiple_queries(strategy: Optional[MultiQueryStrategy] = None) -> str:
    params = {}
    if strategy == MultiQueryStrategy.STOP_IF_ENOUGH_MATCHES:
        params["strategy"] = strategy.value
    return indexes() + "/*/queries" + to_query(params)


def index(index_name: str) -> str:
    return f"{indexes()}/{_segment(index_name)}"


def batch(index_name: str) -> str:
    return index(index_name) + "/batch"


def operation(index_name: str) -> str:
    return index(index_name) + "/operation"


def task(index_name: str, task_id: Union[int, str]) -> str:
    return f"{index(index_name)}/task/{_segment(task_id)}"


def record(index_name: str, object_id: str) -> str:
    return f"{index(index_name)}/{_segment(object_id)}"


def partial_record(index_name: str, object_id: str, upsert: bool = True) -> str:
    params = {} if upsert else {"createIfNotExists": False}
    return record(index_name, object_id) + "/partial" + to_query(params)


def search(index_name: str, query: str, params: Optional[Dict[str, Any]] = None) -> str:
    search_params = dict(params or {})
    search_params["query"] = query
    return index(index_name) + to_query(search_params)


def search_facet(index_name: str, facet: str) -> str:
    return f"{index(index_name)}/facets/{_segment(facet)}/query"


def clear(index_name: str) -> str:
    return index(index_name) + "/clear"


def delete_by(index_name: str) -> str:
    return index(index_name) + "/deleteByQuery"


def settings(index_name: str, params: Optional[Dict[str, Any]] = None) -> str:
    return index(index_name) + "/settings" + to_query(params)


def synonyms(index_name: str) -> str:
    return index(index_name) + "/synonyms"


def synonym(index_name: str, object_id: str, params: Optional[Dict[str, Any]] = None) -> str:
    return f"{synonyms(index_name)}/{_segment(object_id)}" + to_query(params)


def search_synonyms(index_name: str) -> str:
    return synonyms(index_name) + "/search"


def batch_synonyms(index_name: str, params: Optional[Dict[str, Any]] = None) -> str:
    return synonyms(index_name) + "/batch" + to_query(params)


def clear_synonyms(index_name: str, params: Optional[Dict[str, Any]] = None) -> str:
    return synonyms(index_name) + "/clear" + to_query(params)


def rules(index_name: str) -> str:
    return index(index_name) + "/rules"


def rule(index_name: str, object_id: str, params: Optional[Dict[str, Any]] = None) -> str:
    return f"{rules(index_name)}/{_segment(object_id)}" + to_query(params)


def search_rules(index_name: str) -> str:
    return rules(index_name) + "/search"


def batch_rules(index_name: str, params: Optional[Dict[str, Any]] = None) -> str:
    return rules(index_name) + "/batch" + to_query(params)


def clear_rules(index_name: str, params: Optional[Dict[str, Any]] = None) -> str:
    return rules(index_name) + "/clear" + to_query(params)


def logs(params: Optional[Dict[str, Any]] = None) -> str:
    return f"/{API_VERSION}/logs" + to_query(params)
