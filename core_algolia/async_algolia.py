"""
Async Algolia client
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from .base_client import BaseAlgoliaClient, Operation
from .config import AlgoliaConfig
from .constants import DEFAULT_EXPORT_PAGE_SIZE, DEFAULT_WAIT_INTERVAL
from .dispatcher import AsyncRequestDispatcher
from .types import (
    LogType, MultiQueryStrategy, RequestOptions, Result, Success
)
from .utils import RecordLike
from .waiter import AsyncTaskWaiter

logger = logging.getLogger(__name__)

Options = Optional[Union[RequestOptions, Mapping[str, Any]]]


class AsyncAlgoliaClient(BaseAlgoliaClient):
    """
    Async Algolia client

    Same operations as SyncAlgoliaClient, as coroutines. Network waits and
    the delay between task polls are awaited, so many operations can share
    one event loop.
    """

    def __init__(
        self,
        application_id: Optional[str] = None,
        api_key: Optional[str] = None,
        config: Optional[AlgoliaConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        **kwargs
    ):
        """
        Initialize async Algolia client

        Args:
            application_id: Algolia application id
            api_key: Algolia API key
            config: Pre-configured AlgoliaConfig object
            http_client: httpx.AsyncClient to send requests with; left open by aclose()
            **kwargs: Additional configuration overrides
        """
        self.config = self._resolve_config(application_id, api_key, config, **kwargs)
        self.dispatcher = AsyncRequestDispatcher(self.config, http_client=http_client)
        self.waiter = AsyncTaskWaiter(self.dispatcher)

        logger.info(f"AsyncAlgoliaClient initialized for application {self.config.application_id}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def _execute(self, operation: Operation) -> Result:
        result = await self.dispatcher.send(operation.mode, operation.request)
        return self._finish(operation, result)

    # ============= SEARCH OPERATIONS =============

    async def multi(
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
        """
        return await self._execute(self._multi_op(queries, strategy, request_options))

    async def search(
        self,
        index_name: str,
        query: str,
        request_options: Options = None,
        **params
    ) -> Result:
        """Search a single index"""
        return await self._execute(self._search_op(index_name, query, params, request_options))

    async def search_for_facet_values(
        self,
        index_name: str,
        facet: str,
        text: str,
        query: Optional[Dict[str, Any]] = None,
        request_options: Options = None
    ) -> Result:
        """Search the values of a searchable facet"""
        return await self._execute(
            self._search_facet_op(index_name, facet, text, query, request_options)
        )

    # ============= OBJECT OPERATIONS =============

    async def get_object(self, index_name: str, object_id: str, request_options: Options = None) -> Result:
        return await self._execute(self._get_object_op(index_name, object_id, request_options))

    async def add_object(
        self,
        index_name: str,
        obj: RecordLike,
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        """Add an object; with ``id_attribute`` it is saved under that id"""
        if id_attribute:
            return await self.save_object(
                index_name, obj, id_attribute=id_attribute, request_options=request_options
            )
        return await self._execute(self._add_object_op(index_name, obj, request_options))

    async def add_objects(
        self,
        index_name: str,
        objects: Iterable[RecordLike],
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        if id_attribute:
            return await self.save_objects(
                index_name, objects, id_attribute=id_attribute, request_options=request_options
            )
        return await self._execute(self._add_objects_op(index_name, objects, request_options))

    async def save_object(
        self,
        index_name: str,
        obj: RecordLike,
        object_id: Optional[str] = None,
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        """
        Create or replace an object

        Raises:
            ValidationError: If no object id can be found
        """
        return await self._execute(
            self._save_object_op(index_name, obj, object_id, id_attribute, request_options)
        )

    async def save_objects(
        self,
        index_name: str,
        objects: Iterable[RecordLike],
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._save_objects_op(index_name, objects, id_attribute, request_options)
        )

    async def partial_update_object(
        self,
        index_name: str,
        obj: Mapping[str, Any],
        object_id: str,
        upsert: bool = True,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._partial_update_object_op(index_name, obj, object_id, upsert, request_options)
        )

    async def partial_update_objects(
        self,
        index_name: str,
        objects: Iterable[RecordLike],
        upsert: bool = True,
        id_attribute: Optional[str] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._partial_update_objects_op(index_name, objects, upsert, id_attribute, request_options)
        )

    async def delete_object(self, index_name: str, object_id: str, request_options: Options = None) -> Result:
        """
        Delete an object by its objectID

        Raises:
            InvalidObjectIDError: If object_id is empty
        """
        return await self._execute(self._delete_object_op(index_name, object_id, request_options))

    async def delete_objects(
        self,
        index_name: str,
        object_ids: Iterable[str],
        request_options: Options = None
    ) -> Result:
        return await self._execute(self._delete_objects_op(index_name, object_ids, request_options))

    async def delete_by(self, index_name: str, request_options: Options = None, **filters) -> Result:
        """Delete all objects matching a filter, see SyncAlgoliaClient.delete_by"""
        return await self._execute(self._delete_by_op(index_name, filters, request_options))

    # ============= INDEX MANAGEMENT =============

    async def list_indexes(self, page: Optional[int] = None, request_options: Options = None) -> Result:
        return await self._execute(self._list_indexes_op(page, request_options))

    async def delete_index(self, index_name: str, request_options: Options = None) -> Result:
        return await self._execute(self._delete_index_op(index_name, request_options))

    async def clear_index(self, index_name: str, request_options: Options = None) -> Result:
        return await self._execute(self._clear_index_op(index_name, request_options))

    async def get_settings(self, index_name: str, request_options: Options = None) -> Result:
        return await self._execute(self._get_settings_op(index_name, request_options))

    async def set_settings(
        self,
        index_name: str,
        settings: Mapping[str, Any],
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._set_settings_op(index_name, settings, forward_to_replicas, request_options)
        )

    async def move_index(self, src_index: str, dst_index: str, request_options: Options = None) -> Result:
        return await self._execute(self._index_operation_op("move", src_index, dst_index, request_options))

    async def copy_index(self, src_index: str, dst_index: str, request_options: Options = None) -> Result:
        return await self._execute(self._index_operation_op("copy", src_index, dst_index, request_options))

    async def get_logs(
        self,
        offset: Optional[int] = None,
        length: Optional[int] = None,
        index_name: Optional[str] = None,
        log_type: Optional[Union[LogType, str]] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._get_logs_op(offset, length, index_name, log_type, request_options)
        )

    # ============= SYNONYMS =============

    async def search_synonyms(
        self,
        index_name: str,
        query: str = "",
        request_options: Options = None,
        **params
    ) -> Result:
        return await self._execute(self._search_synonyms_op(index_name, query, params, request_options))

    async def get_synonym(self, index_name: str, object_id: str, request_options: Options = None) -> Result:
        return await self._execute(self._get_synonym_op(index_name, object_id, request_options))

    async def save_synonym(
        self,
        index_name: str,
        synonym: RecordLike,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._save_synonym_op(index_name, synonym, forward_to_replicas, request_options)
        )

    async def delete_synonym(
        self,
        index_name: str,
        object_id: str,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._delete_synonym_op(index_name, object_id, forward_to_replicas, request_options)
        )

    async def batch_synonyms(
        self,
        index_name: str,
        synonyms: Iterable[Mapping[str, Any]],
        forward_to_replicas: Optional[bool] = None,
        replace_existing_synonyms: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._batch_synonyms_op(
                index_name, synonyms, forward_to_replicas,
                replace_existing_synonyms, request_options
            )
        )

    async def clear_synonyms(
        self,
        index_name: str,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._clear_synonyms_op(index_name, forward_to_replicas, request_options)
        )

    async def export_synonyms(self, index_name: str, hits_per_page: int = DEFAULT_EXPORT_PAGE_SIZE) -> Result:
        return await self._export(self._search_synonyms_op, index_name, hits_per_page)

    # ============= RULES =============

    async def search_rules(
        self,
        index_name: str,
        query: str = "",
        request_options: Options = None,
        **params
    ) -> Result:
        return await self._execute(self._search_rules_op(index_name, query, params, request_options))

    async def get_rule(self, index_name: str, object_id: str, request_options: Options = None) -> Result:
        return await self._execute(self._get_rule_op(index_name, object_id, request_options))

    async def save_rule(
        self,
        index_name: str,
        rule: RecordLike,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._save_rule_op(index_name, rule, forward_to_replicas, request_options)
        )

    async def delete_rule(
        self,
        index_name: str,
        object_id: str,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._delete_rule_op(index_name, object_id, forward_to_replicas, request_options)
        )

    async def batch_rules(
        self,
        index_name: str,
        rules: Iterable[Mapping[str, Any]],
        forward_to_replicas: Optional[bool] = None,
        clear_existing_rules: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._batch_rules_op(
                index_name, rules, forward_to_replicas,
                clear_existing_rules, request_options
            )
        )

    async def clear_rules(
        self,
        index_name: str,
        forward_to_replicas: Optional[bool] = None,
        request_options: Options = None
    ) -> Result:
        return await self._execute(
            self._clear_rules_op(index_name, forward_to_replicas, request_options)
        )

    async def export_rules(self, index_name: str, hits_per_page: int = DEFAULT_EXPORT_PAGE_SIZE) -> Result:
        return await self._export(self._search_rules_op, index_name, hits_per_page)

    async def _export(self, search_op, index_name: str, hits_per_page: int) -> Result:
        exported: List[Dict[str, Any]] = []
        page = 0

        while True:
            params = {"page": page, "hitsPerPage": hits_per_page}
            result = await self._execute(search_op(index_name, "", params))
            if not isinstance(result, Success):
                return result

            hits, last_page = self._collect_page(result, hits_per_page)
            exported.extend(hits)
            if last_page:
                return Success(exported)
            page += 1

    # ============= TASKS =============

    async def wait_task(
        self,
        index_name: str,
        task_id: Union[int, str],
        interval: float = DEFAULT_WAIT_INTERVAL
    ) -> Result:
        """
        Wait until a task is published

        Polls without limit. For a deadline:
            await asyncio.wait_for(client.wait_task("products", 42), timeout=30)
        """
        return await self.waiter.wait_task(index_name, task_id, interval)

    async def wait(self, result: Result, interval: float = DEFAULT_WAIT_INTERVAL) -> Result:
        """Wait for the task of a write response, then return that response"""
        return await self.waiter.wait(result, interval)

    async def aclose(self):
        """Close client connection"""
        await self.dispatcher.aclose()
        logger.info("Algolia client closed")
