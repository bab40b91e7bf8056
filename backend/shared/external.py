"""
Bounded calls to external services.

The Supabase and SMTP clients are blocking. Every call goes through
call_external(), which runs it in a worker thread under a timeout and
turns hangs and unexpected upstream failures into ExternalServiceError.
"""

import asyncio
import logging
from typing import Any, Callable, TypeVar

from .exceptions import AccountsError, ExternalServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def call_external(
    service: str,
    operation: str,
    func: Callable[..., T],
    *args: Any,
    timeout: float,
    **kwargs: Any,
) -> T:
    """
    Run a blocking call to an external service with a timeout.

    Args:
        service: Service name used in logs and error details (e.g. "supabase_auth")
        operation: Short operation name for logs (e.g. "create_user")
        func: The blocking callable
        timeout: Maximum seconds to wait

    Returns:
        Whatever func returns

    Raises:
        AccountsError: Domain errors raised by func pass through unchanged
        ExternalServiceError: On timeout or any other upstream failure
    """
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(func, *args, **kwargs),
            timeout=timeout,
        )
    except AccountsError:
        raise
    except asyncio.TimeoutError:
        logger.error(f"{service}.{operation} timed out after {timeout}s")
        raise ExternalServiceError(
            f"{service} did not respond in time",
            service=service,
            details={"operation": operation},
        )
    except Exception as e:
        logger.exception(f"{service}.{operation} failed: {e}")
        raise ExternalServiceError(
            f"{service} is unavailable",
            service=service,
            details={"operation": operation},
        ) from e
