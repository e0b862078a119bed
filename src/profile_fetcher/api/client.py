"""
API Client Module

Async HTTP client for fetching users and posts from the JSONPlaceholder API.
Every call is a suspension point. A non-2xx answer raises NotFoundError
carrying the status code; a 2xx body of the wrong shape raises
InvalidResponseError.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

import httpx

from ..config import config
from ..errors import InvalidResponseError, NotFoundError
from .models import Post, User


logger = logging.getLogger(__name__)

T = TypeVar("T")


class APIClient:
    """
    Async client for the JSONPlaceholder API.

    Features:
    - One short-lived httpx.AsyncClient per request
    - Configurable base URL, timeout and transport
    - Non-2xx responses surface as NotFoundError
    - Wrong-shaped bodies surface as InvalidResponseError
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        count_delay: Optional[float] = None
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root (uses config default if None).
            transport: Optional httpx transport, e.g. a MockTransport in tests.
            count_delay: Simulated latency of fetch_post_count in seconds.
        """
        self.base_url = base_url or config.api.base_url
        self.timeout = config.api.timeout_seconds
        self.transport = transport
        self.count_delay = (
            config.api.count_delay_seconds if count_delay is None else count_delay
        )
        logger.info(f"APIClient initialized (base_url: {self.base_url})")

    async def fetch_user(self, user_id: Any) -> User:
        """
        Fetch a single user.

        The id is forwarded as given; an invalid one fails upstream.

        Raises:
            NotFoundError: If the response status is not 2xx.
            InvalidResponseError: If the body is not a single user record,
                e.g. the user list the API returns for an empty id.
        """
        data, url = await self._get_json(f"{config.api.users_endpoint}/{user_id}")
        user = _parse_record(User, data, url)
        logger.debug(f"Fetched user {user.id} ({user.name})")
        return user

    async def fetch_user_posts(self, user_id: Any) -> List[Post]:
        """
        Fetch all posts owned by a user.

        Raises:
            NotFoundError: If the response status is not 2xx.
            InvalidResponseError: If the body is not a list of posts.
        """
        data, url = await self._get_json(
            config.api.posts_endpoint, params={"userId": user_id}
        )
        posts = _parse_records(Post, data, url)
        logger.debug(f"Fetched {len(posts)} posts for user {user_id}")
        return posts

    async def fetch_post_count(self, posts: Sequence[Post]) -> int:
        """Return len(posts) after the configured simulated delay."""
        await asyncio.sleep(self.count_delay)
        return len(posts)

    async def fetch_user_resource(
        self,
        resource: str,
        user_id: Any
    ) -> List[Dict[str, Any]]:
        """
        Fetch a per-user collection such as albums or todos.

        Args:
            resource: One of config.api.user_resources.
            user_id: Owning user id.

        Returns:
            The raw JSON records.
        """
        if resource not in config.api.user_resources:
            raise ValueError(f"Unsupported resource: {resource}")
        data, url = await self._get_json(f"/{resource}", params={"userId": user_id})
        if not isinstance(data, list):
            raise InvalidResponseError(f"Expected a list of {resource}", url)
        return data

    async def search_posts(self, term: str) -> List[Post]:
        """
        Fetch all posts and keep those whose title or body contains term.

        Raises:
            ValueError: If the search term is empty.
            NotFoundError: If the response status is not 2xx.
        """
        term = term.strip()
        if not term:
            raise ValueError("Search term must not be empty")

        data, url = await self._get_json(config.api.posts_endpoint)
        posts = _parse_records(Post, data, url)
        matches = [post for post in posts if post.matches(term)]
        logger.info(f"Search '{term}' matched {len(matches)} of {len(posts)} posts")
        return matches

    async def create_post(self, title: str, body: str, user_id: int) -> Post:
        """
        Create a post. The API echoes the payload back with a fake id.

        Raises:
            NotFoundError: If the response status is not 2xx.
        """
        payload = {"title": title, "body": body, "userId": user_id}
        async with self._client() as client:
            response = await client.post(config.api.posts_endpoint, json=payload)
            self._check_status(response)
            url = str(response.request.url)
            post = _parse_record(Post, _decode(response, url), url)

        logger.info(f"Created post {post.id} for user {post.user_id}")
        return post

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport
        )

    async def _get_json(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Tuple[Any, str]:
        """
        Issue a GET request and parse the JSON body.

        Args:
            path: Endpoint path relative to the base URL.
            params: Optional query parameters.

        Returns:
            The decoded JSON body and the full request URL.
        """
        async with self._client() as client:
            logger.debug(f"GET {path} params={params}")
            response = await client.get(path, params=params)
            self._check_status(response)
            url = str(response.request.url)
            return _decode(response, url), url

    @staticmethod
    def _check_status(response: httpx.Response) -> None:
        if not response.is_success:
            logger.warning(
                f"{response.request.method} {response.request.url} "
                f"returned {response.status_code}"
            )
            raise NotFoundError(response.status_code, str(response.request.url))


def _decode(response: httpx.Response, url: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise InvalidResponseError("Response body is not JSON", url) from e


def _parse_record(model: Type[T], data: Any, url: str) -> T:
    """Build one record, turning a wrong-shaped payload into InvalidResponseError."""
    if not isinstance(data, dict):
        raise InvalidResponseError(
            f"Expected a {model.__name__} object, got {type(data).__name__}", url
        )
    try:
        return model.from_json(data)
    except (KeyError, TypeError) as e:
        raise InvalidResponseError(f"Malformed {model.__name__} record ({e!r})", url) from e


def _parse_records(model: Type[T], data: Any, url: str) -> List[T]:
    if not isinstance(data, list):
        raise InvalidResponseError(
            f"Expected a list of {model.__name__} records, got {type(data).__name__}", url
        )
    return [_parse_record(model, item, url) for item in data]
