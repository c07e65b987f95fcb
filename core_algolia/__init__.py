"""
Core Algolia Module

This module provides sync and async clients for the Algolia search API,
with host failover and task waiting.
"""

__version__ = "0.1.0"

from .async_algolia import AsyncAlgoliaClient
from .sync_algolia import SyncAlgoliaClient
from .config import AlgoliaConfig, ConfigLoader, default_host_resolver, get_algolia_config
from .types import *
from .exceptions import *
from .dispatcher import RequestDispatcher, AsyncRequestDispatcher
from .waiter import TaskWaiter, AsyncTaskWaiter

# Factory function
def create_algolia_client(
    application_id: str = None,
    api_key: str = None,
    use_async: bool = False,
    **kwargs
):
    """
    Factory function to create Algolia client
    
    Args:
        application_id: Algolia application id (default: from environment)
        api_key: Algolia API key (default: from environment)
        use_async: Whether to create async client (default: False)
        **kwargs: Additional configuration
    
    Returns:
        AsyncAlgoliaClient or SyncAlgoliaClient instance
    """
    if use_async:
        return AsyncAlgoliaClient(application_id=application_id, api_key=api_key, **kwargs)
    else:
        return SyncAlgoliaClient(application_id=application_id, api_key=api_key, **kwargs)

__all__ = [
    # Main clients
    "AsyncAlgoliaClient",
    "SyncAlgoliaClient",
    "AlgoliaConfig",
    "ConfigLoader",
    "default_host_resolver",
    "get_algolia_config",
    "create_algolia_client",
    
    # Dispatch and polling
    "RequestDispatcher",
    "AsyncRequestDispatcher",
    "TaskWaiter",
    "AsyncTaskWaiter",
    
    # Types
    "Mode",
    "MultiQueryStrategy",
    "LogType",
    "RequestOptions",
    "Request",
    "Record",
    "TaskReference",
    "Success",
    "HttpError",
    "TransportFailure",
    "Result",
    
    # Exceptions
    "AlgoliaError",
    "ConfigurationError",
    "MissingApplicationIDError",
    "MissingAPIKeyError",
    "ValidationError",
    "InvalidObjectIDError",
    "AlgoliaHTTPError",
    "AlgoliaUnreachableError",
]
