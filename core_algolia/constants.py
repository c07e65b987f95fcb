"""
Constants for Algolia operations
"""

# API
API_VERSION = 1
API_KEY_HEADER = "X-Algolia-API-Key"
APPLICATION_ID_HEADER = "X-Algolia-Application-Id"

# Environment
APPLICATION_ID_ENV = "ALGOLIA_APPLICATION_ID"
API_KEY_ENV = "ALGOLIA_API_KEY"

# Connection constants (seconds, multiplied by attempt number + 1)
BASE_CONNECT_TIMEOUT = 3.0
BASE_READ_TIMEOUT = 30.0
MAX_RETRIES = 4

# Task polling
DEFAULT_WAIT_INTERVAL = 1.0  # seconds
TASK_PUBLISHED = "published"
TASK_NOT_PUBLISHED = "notPublished"

# Export
DEFAULT_EXPORT_PAGE_SIZE = 1000

# Attributes
OBJECT_ID_ATTRIBUTE = "objectID"
INDEX_NAME_ATTRIBUTE = "indexName"
TASK_ID_ATTRIBUTE = "taskID"

# delete_by ignores pagination/retrieval parameters
DELETE_BY_IGNORED_PARAMS = ("hitsPerPage", "attributesToRetrieve")

UNREACHABLE_MESSAGE = "Unable to connect to Algolia"
