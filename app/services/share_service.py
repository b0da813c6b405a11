"""
Short-link sharing of workout plans, backed by Redis.

A plan is stored under "workout:<shortId>" with no expiration. When Redis
is not reachable and SHARE_MEMORY_FALLBACK is on (local development) an
in-process store is used for that call instead.
"""
import logging
import secrets
import string
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from app.core.config import settings
from app.core.logger import logger, log_error
from app.models.workout import WorkoutPlan


SHORT_ID_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

# In-memory store for development, used only when SHARE_MEMORY_FALLBACK is on
_memory_store: dict[str, str] = {}

# Tenacity retry policy: 3 total attempts, exponential backoff 0.5s→4s
# Only retries transient errors: dropped connections and timeouts
_redis_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type((RedisConnectionError, RedisTimeoutError)),
    before_sleep=before_sleep_log(logging.getLogger(__name__), logging.WARNING),
    reraise=True,
)


async def get_redis() -> Optional[redis.Redis]:
    """
    Get a Redis client, probing the server on every call.

    Returns None to use the memory store when Redis is unreachable and
    SHARE_MEMORY_FALLBACK is enabled.

    Raises:
        redis.exceptions.ConnectionError: If Redis is unreachable and the
            memory store is disabled
    """
    client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True, socket_connect_timeout=2)
    try:
        await client.ping()
        return client
    except (RedisConnectionError, RedisTimeoutError, OSError) as e:
        await client.aclose()
        if not settings.SHARE_MEMORY_FALLBACK:
            log_error("Redis connection", e)
            raise RedisConnectionError(f"Redis not available: {e}") from e
        logger.warning(f"Redis not available, using in-memory fallback: {e}")
        return None


def generate_short_id(length: int = None) -> str:
    """Random alphanumeric id of `length` characters (SHORT_ID_LENGTH by default)."""
    length = length or settings.SHORT_ID_LENGTH
    return "".join(secrets.choice(SHORT_ID_ALPHABET) for _ in range(length))


def _key(short_id: str) -> str:
    return f"{settings.SHARE_KEY_PREFIX}{short_id}"


@_redis_retry
async def _exists(client: Optional[redis.Redis], key: str) -> bool:
    if client is None:
        return key in _memory_store
    return bool(await client.exists(key))


@_redis_retry
async def _store(client: Optional[redis.Redis], key: str, value: str) -> None:
    if client is None:
        _memory_store[key] = value
    else:
        await client.set(key, value)


@_redis_retry
async def _load(client: Optional[redis.Redis], key: str) -> Optional[str]:
    if client is None:
        return _memory_store.get(key)
    return await client.get(key)


async def create_short_link(plan: WorkoutPlan) -> str:
    """
    Store a plan under a fresh short id.

    Ids are drawn until one is unused; the plan never expires.

    Returns:
        The short id
    """
    client = await get_redis()
    try:
        short_id = generate_short_id()
        while await _exists(client, _key(short_id)):
            short_id = generate_short_id()

        await _store(client, _key(short_id), plan.model_dump_json())
        logger.info(f"Created short link {short_id}")
        return short_id
    finally:
        if client is not None:
            await client.aclose()


async def resolve_short_link(short_id: str) -> Optional[WorkoutPlan]:
    """
    Look up a shared plan.

    Returns:
        The plan, or None if the id is unknown

    Raises:
        ValueError: If the stored value is not a valid plan
    """
    client = await get_redis()
    try:
        data = await _load(client, _key(short_id))
    finally:
        if client is not None:
            await client.aclose()

    if data is None:
        return None

    try:
        return WorkoutPlan.model_validate_json(data)
    except ValueError as e:
        log_error("Shared workout decoding", e)
        raise ValueError(f"Stored workout {short_id} is corrupt")
