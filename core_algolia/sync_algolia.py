"""
Synchronous Algolia client
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from .base_client import BaseAlgoliaClient, Operation
from .config import AlgoliaConfig
from .constants import DEFAULT_EXPORT_PAGE_SIZE, DEFAULT_WAIT_INTERVAL
from .dispatcher import RequestDispatcher
from .types import (
    LogType, MultiQueryStrategy, RequestOptions, Result, Success
)
from .utils import RecordLike
from .waiter import TaskWaiter

logger = logging.getLogger(__name__)

Options = Optional[Union[RequestOptions, Mapping[str, Any]]]


class SyncAlgoliaClient(BaseAlgoliaClient):
    """
    Synchronous Algolia client

    Every operation returns a Result: Success, HttpError or
    TransportFailure. Only invalid arguments raise, before anything is sent.
    """

    def __init__(
        self,
        application_id: Optional[str] = None,
        api_key: Optional[str] = None,
        config: Optional[AlgoliaConfig] = None,
        http_client: Optional[httpx.Client] = None,
        **kwargs
    ):
        """
        Initialize sync Algolia client

        Args:
            application_id: Algolia application id
            api_key: Algolia API key
            config: Pre-configured AlgoliaConfig object
            http_client: httpx.Client to send requests with; left open by close()
            **kwargs: Additional configuration overrides
        """
        self.config = self._resolve_config(application_id, api_key, config, **kwargs)
        self.dispatcher = RequestDispatcher(self.config, http_client=http_client)
        self.waiter = TaskWaiter(self.dispatcher)

        logger.info(f"SyncAlgoliaClient initialized for application {self.config.application_id}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _execute(self, operation: Operation) -> Result:
        result = self.dispatcher.send(operation.mode, operation.request)
        return self._finish(operation, result)

    # ============= SEARCH OPERATIONS =============

    def multi(
        self,
        queries: Iterable[Mapping[str, Any]],
        strategy: Optional[Union[MultiQueryStrategy, str]] = None,
        request_options: Options = None
    ) -> Result:
        """
        Search multiple indexes in one request

        Args:
            queries: Search params, each with an ``index_name`` key
            strategy: Multiple queries strategy
            request_options: Extra headers

        Returns:
            Result with one search response per query
        """
        return self._execute(self._multi_op(queries, strategy, request_options))

    def search(
        self,
        index_name: str,
        query: str,
        request_options: Options = None,
        **params
    ) -> Result:
        """
        Search a single index

        Args:
            index_name: Target index
            query: Full-text query
            request_options: Extra headers
            **params: Search parameters, e.g. ``page=1, hitsPerPage=20``

        Returns:
            Search response
        """
        return self._execute(self._search_op(index_name, query, params, request_options))

    def search_for_facet_values(
        self,
        index_name: str,
        facet: str,
        text: str,
        query: Optional[Dict[str, Any]] = None,
        request_options: Options = None
    ) -> Result:
        """
        Search the values of a facet

        The facet must be declared searchable in ``attributesForFaceting``.
        Results are sorted by decreasing count.

        Args:
            index_name: Target index
            facet: Facet attribute name
            text: Text to match against facet values
            query: Search params restricting the matched records
            request_options: Extra headers

        Returns:
            Response with ``facetHits``
        """
        return self._execute(
            self._search_facet_op(index_name, facet, text, query, request_options)
        )

    # ============= OBJECT OPERATIONS =============

    def get_object(self, index_name: str, object_id: str, request_options: Options = None) -> Result:
        """Get an object by its objectID"""
        return self._execute(self._get_object_op(index_name, object_id, request_options))

    def add_object(
        self,
        index_name: str,
        obj: RecordLike,
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        """
        Add an object

        Args:
            index_name: Target index
            obj: Object attributes or Record
            id_attribute: Attribute to use as objectID; saves the object
                under that id instead of letting the engine assign one
            request_options: Extra headers

        Returns:
            Write response with indexName injected
        """
        if id_attribute:
            return self.save_object(
                index_name, obj, id_attribute=id_attribute, request_options=request_options
            )
        return self._execute(self._add_object_op(index_name, obj, request_options))

    def add_objects(
        self,
        index_name: str,
        objects: Iterable[RecordLike],
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        """Add multiple objects in one batch"""
        if id_attribute:
            return self.save_objects(
                index_name, objects, id_attribute=id_attribute, request_options=request_options
            )
        return self._execute(self._add_objects_op(index_name, objects, request_options))

    def save_object(
        self,
        index_name: str,
        obj: RecordLike,
        object_id: Optional[str] = None,
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        """
        Create or replace an object

        Args:
            index_name: Target index
            obj: Object attributes or Record
            object_id: Explicit objectID; taken from the object when omitted
            id_attribute: Attribute holding the objectID (default objectID)
            request_options: Extra headers

        Returns:
            Write response with indexName injected

        Raises:
            ValidationError: If no object id can be found
        """
        return self._execute(
            self._save_object_op(index_name, obj, object_id, id_attribute, request_options)
        )

    def save_objects(
        self,
        index_name: str,
        objects: Iterable[RecordLike],
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        """Create or replace multiple objects in one batch"""
        return self._execute(
            self._save_objects_op(index_name, objects, id_attribute, request_options)
        )

    def partial_update_object(
        self,
        index_name: str,
        obj: Mapping[str, Any],
        object_id: str,
        upsert: bool = True,
        request_options: Options = None
    ) -> Result:
        """
        Update some attributes of an object

        Args:
            index_name: Target index
            obj: Attributes to update
            object_id: Object to update
            upsert: Create the object if it does not exist
            request_options: Extra headers
        """
        return self._execute(
            self._partial_update_object_op(index_name, obj, object_id, upsert, request_options)
        )

    def partial_update_objects(
        self,
        index_name: str,
        objects: Iterable[RecordLike],
        upsert: bool = True,
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        """Partially update multiple objects in one batch"""
        return self._execute(
            self._partial_update_objects_op(index_name, objects, upsert, id_attribute, request_options)
        )

    def delete_object(self, index_name: str, object_id: str, request_options: Options = None) -> Result:
        """
        Delete an object by its objectID

        Raises:
            InvalidObjectIDError: If object_id is empty
        """
        return self._execute(self._delete_object_op(index_name, object_id, request_options))

    def delete_objects(
        self,
        index_name: str,
        object_ids: Iterable[str],
        request_options: Options = None
    ) -> Result:
        """Delete multiple objects in one batch"""
        return self._execute(self._delete_objects_op(index_name, object_ids, request_options))

    def delete_by(self, index_name: str, request_options: Options = None, **filters) -> Result:
        """
        Delete all objects matching a filter

        Allowed filters: ``filters``, ``facetFilters``, ``numericFilters``,
        ``aroundLatLng`` with ``aroundRadius``, ``insideBoundingBox`` and
        ``insidePolygon``. ``hitsPerPage`` and ``attributesToRetrieve`` are
        dropped.

        Raises:
            ValidationError: If no filter is given
        """
        return self._execute(self._delete_by_op(index_name, filters, request_options))

    # ============= INDEX MANAGEMENT =============

    def list_indexes(self, page: Optional[int] = None, request_options: Options = None) -> Result:
        """List all indexes"""
        return self._execute(self._list_indexes_op(page, request_options))

    def delete_index(self, index_name: str, request_options: Options = None) -> Result:
        """Delete an index"""
        return self._execute(self._delete_index_op(index_name, request_options))

    def clear_index(self, index_name: str, request_options: Options = None) -> Result:
        """Remove all objects of an index, keeping its settings"""
        return self._execute(self._clear_index_op(index_name, request_options))

    def get_settings(self, index_name: str, request_options: Options = None) -> Result:
        return self._execute(self._get_settings_op(index_name, request_options))

    def set_settings(
        self,
        index_name: str,
        settings: Mapping[str, Any],
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        """
        Set index settings

        Args:
            index_name: Target index
            settings: Settings to change
            forward_to_replicas: Apply the settings to replicas too
            request_options: Extra headers
        """
        return self._execute(
            self._set_settings_op(index_name, settings, forward_to_replicas, request_options)
        )

    def move_index(self, src_index: str, dst_index: str, request_options: Options = None) -> Result:
        """Rename an index, replacing the destination"""
        return self._execute(self._index_operation_op("move", src_index, dst_index, request_options))

    def copy_index(self, src_index: str, dst_index: str, request_options: Options = None) -> Result:
        """Copy an index, replacing the destination"""
        return self._execute(self._index_operation_op("copy", src_index, dst_index, request_options))

    def get_logs(
        self,
        offset: Optional[int] = None,
        length: Optional[int] = None,
        index_name: Optional[str] = None,
        log_type: Optional[Union[LogType, str]] = None,
        request_options: Options = None
    ) -> Result:
        """
        Get the latest search and indexing logs

        Args:
            offset: First entry to retrieve, 0 is the most recent
            length: Number of entries, at most 1000
            index_name: Only entries for this index
            log_type: all, query, build or error
            request_options: Extra headers
        """
        return self._execute(
            self._get_logs_op(offset, length, index_name, log_type, request_options)
        )

    # ============= SYNONYMS =============

    def search_synonyms(
        self,
        index_name: str,
        query: str = "",
        request_options: Options = None,
        **params
    ) -> Result:
        """Search the synonyms of an index"""
        return self._execute(self._search_synonyms_op(index_name, query, params, request_options))

    def get_synonym(self, index_name: str, object_id: str, request_options: Options = None) -> Result:
        return self._execute(self._get_synonym_op(index_name, object_id, request_options))

    def save_synonym(
        self,
        index_name: str,
        synonym: RecordLike,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        """Create or replace a synonym, identified by its objectID"""
        return self._execute(
            self._save_synonym_op(index_name, synonym, forward_to_replicas, request_options)
        )

    def delete_synonym(
        self,
        index_name: str,
        object_id: str,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return self._execute(
            self._delete_synonym_op(index_name, object_id, forward_to_replicas, request_options)
        )

    def batch_synonyms(
        self,
        index_name: str,
        synonyms: Iterable[Mapping[str, Any]],
        forward_to_replicas: Optional[bool] = None,
        replace_existing_synonyms: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        """
        Create or replace several synonyms

        Args:
            index_name: Target index
            synonyms: Synonym objects
            forward_to_replicas: Apply to replicas too
            replace_existing_synonyms: Remove synonyms not in this batch
            request_options: Extra headers
        """
        return self._execute(
            self._batch_synonyms_op(
                index_name, synonyms, forward_to_replicas,
                replace_existing_synonyms, request_options
            )
        )

    def clear_synonyms(
        self,
        index_name: str,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return self._execute(
            self._clear_synonyms_op(index_name, forward_to_replicas, request_options)
        )

    def export_synonyms(self, index_name: str, hits_per_page: int = DEFAULT_EXPORT_PAGE_SIZE) -> Result:
        """
        Export every synonym of an index

        Returns:
            Success with the list of synonyms, or the first failed page
        """
        return self._export(self._search_synonyms_op, index_name, hits_per_page)

    # ============= RULES =============

    def search_rules(
        self,
        index_name: str,
        query: str = "",
        request_options: Options = None,
        **params
    ) -> Result:
        """Search the rules of an index"""
        return self._execute(self._search_rules_op(index_name, query, params, request_options))

    def get_rule(self, index_name: str, object_id: str, request_options: Options = None) -> Result:
        return self._execute(self._get_rule_op(index_name, object_id, request_options))

    def save_rule(
        self,
        index_name: str,
        rule: RecordLike,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        """Create or replace a rule, identified by its objectID"""
        return self._execute(
            self._save_rule_op(index_name, rule, forward_to_replicas, request_options)
        )

    def delete_rule(
        self,
        index_name: str,
        object_id: str,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return self._execute(
            self._delete_rule_op(index_name, object_id, forward_to_replicas, request_options)
        )

    def batch_rules(
        self,
        index_name: str,
        rules: Iterable[Mapping[str, Any]],
        forward_to_replicas: Optional[bool] = None,
        clear_existing_rules: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        """
        Create or replace several rules

        Args:
            index_name: Target index
            rules: Rule objects
            forward_to_replicas: Apply to replicas too
            clear_existing_rules: Remove rules not in this batch
            request_options: Extra headers
        """
        return self._execute(
            self._batch_rules_op(
                index_name, rules, forward_to_replicas,
                clear_existing_rules, request_options
            )
        )

    def clear_rules(
        self,
        index_name: str,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return self._execute(
            self._clear_rules_op(index_name, forward_to_replicas, request_options)
        )

    def export_rules(self, index_name: str, hits_per_page: int = DEFAULT_EXPORT_PAGE_SIZE) -> Result:
        """
        Export every rule of an index

        Returns:
            Success with the list of rules, or the first failed page
        """
        return self._export(self._search_rules_op, index_name, hits_per_page)

    def _export(self, search_op, index_name: str, hits_per_page: int) -> Result:
        exported: List[Dict[str, Any]] = []
        page = 0

        while True:
            params = {"page": page, "hitsPerPage": hits_per_page}
            result = self._execute(search_op(index_name, "", params))
            if not isinstance(result, Success):
                return result

            hits, last_page = self._collect_page(result, hits_per_page)
            exported.extend(hits)
            if last_page:
                return Success(exported)
            page += 1

    # ============= TASKS =============

    def wait_task(
        self,
        index_name: str,
        task_id: Union[int, str],
        interval: float = DEFAULT_WAIT_INTERVAL
    ) -> Result:
        """
        Block until a task is published

        Polls without limit; see ``TaskWaiter.wait_task``.

        Args:
            index_name: Index the task belongs to
            task_id: Task id from a write response
            interval: Seconds between polls
        """
        return self.waiter.wait_task(index_name, task_id, interval)

    def wait(self, result: Result, interval: float = DEFAULT_WAIT_INTERVAL) -> Result:
        """
        Wait for the task of a write response, then return that response

        Example:
            client.wait(client.save_object("products", {"objectID": "1"}))
        """
        return self.waiter.wait(result, interval)

    def close(self):
        """Close client connection"""
        self.dispatcher.close()
        logger.info("Algolia client closed")
