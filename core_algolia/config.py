"""
Algolia configuration management
"""
import os
import logging
from typing import Callable, Optional
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

from .constants import API_KEY_ENV, APPLICATION_ID_ENV, MAX_RETRIES
from .exceptions import MissingAPIKeyError, MissingApplicationIDError
from .types import Mode

logger = logging.getLogger(__name__)

HostResolver = Callable[[Mode, str, int], str]


def default_host_resolver(mode: Mode, application_id: str, retry: int) -> str:
    """
    Resolve the host for a given attempt

    Attempt 0 goes to the mode-specific primary host. Attempts 1-3 go to
    numbered fallback hosts on separate infrastructure.

    Args:
        mode: Read or write traffic
        application_id: Algolia application id
        retry: 0-based attempt number

    Returns:
        Host name, without scheme
    """
    if retry == 0:
        if mode == Mode.READ:
            return f"{application_id}-dsn.algolia.net"
        return f"{application_id}.algolia.net"

    if 0 < retry < MAX_RETRIES:
        return f"{application_id}-{retry}.algolianet.com"

    raise ValueError(f"No host for retry {retry}, maximum is {MAX_RETRIES - 1}")


@dataclass(frozen=True)
class AlgoliaConfig:
    """
    Immutable Algolia configuration

    The API key is kept out of repr() so configs can be logged safely.
    """
    application_id: str
    api_key: str = field(repr=False)
    host_resolver: HostResolver = field(default=default_host_resolver, repr=False)

    def __post_init__(self):
        """Validate configuration after initialization"""
        if not self.application_id:
            raise MissingApplicationIDError()
        if not self.api_key:
            raise MissingAPIKeyError()


def _load_env_file() -> None:
    """Load a .env file from the working directory; set variables win"""
    load_dotenv(find_dotenv(usecwd=True), override=False)


class ConfigLoader:
    """Load and validate Algolia configuration"""

    @staticmethod
    def from_environment(
        host_resolver: Optional[HostResolver] = None,
        load_env_file: bool = True
    ) -> AlgoliaConfig:
        """
        Load configuration from environment variables

        A .env file in the working directory is read first when present;
        variables already set in the environment win.
        """
        if load_env_file:
            _load_env_file()

        application_id = os.environ.get(APPLICATION_ID_ENV)
        if not application_id:
            raise MissingApplicationIDError()

        api_key = os.environ.get(API_KEY_ENV)
        if not api_key:
            raise MissingAPIKeyError()

        logger.debug(f"Loaded Algolia configuration for application {application_id} from environment")

        return AlgoliaConfig(
            application_id=application_id,
            api_key=api_key,
            host_resolver=host_resolver or default_host_resolver,
        )

    @staticmethod
    def from_params(
        application_id: Optional[str] = None,
        api_key: Optional[str] = None,
        host_resolver: Optional[HostResolver] = None,
        load_env_file: bool = True
    ) -> AlgoliaConfig:
        """
        Load configuration from parameters

        A value left out is taken from the environment, .env file included.
        """
        if load_env_file and not (application_id and api_key):
            _load_env_file()

        application_id = application_id or os.environ.get(APPLICATION_ID_ENV)
        api_key = api_key or os.environ.get(API_KEY_ENV)

        return AlgoliaConfig(
            application_id=application_id,
            api_key=api_key,
            host_resolver=host_resolver or default_host_resolver,
        )


def get_algolia_config(
    application_id: Optional[str] = None,
    api_key: Optional[str] = None,
    **kwargs
) -> AlgoliaConfig:
    """
    Main function to get Algolia configuration
    Supports both environment variables and parameters
    """
    if application_id or api_key:
        return ConfigLoader.from_params(
            application_id=application_id,
            api_key=api_key,
            **kwargs
        )
    return ConfigLoader.from_environment(**kwargs)
