"""
Retry utilities for handling transient failures
"""
import random
import time
from typing import Callable, Any, Optional, List
from functools import wraps
import logging

import requests

logger = logging.getLogger(__name__)

class RetryConfig:
    """Configuration for retry behavior"""
    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
        retryable_exceptions: Optional[List[type]] = None
    ):
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.retryable_exceptions = retryable_exceptions or [Exception]

def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay for exponential backoff with jitter"""
    delay = config.base_delay * (config.exponential_base ** (attempt - 1))
    delay = min(delay, config.max_delay)

    if config.jitter:
        delay *= (0.5 + random.random() * 0.5)

    return delay

def retry_call(func: Callable, config: RetryConfig, *args, **kwargs) -> Any:
    """Call func, retrying retryable exceptions with exponential backoff"""
    last_exception = None

    for attempt in range(1, config.max_attempts + 1):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            last_exception = e

            if not any(isinstance(e, exc_type) for exc_type in config.retryable_exceptions):
                logger.warning(f"Non-retryable exception: {e}")
                raise

            if attempt == config.max_attempts:
                logger.error(f"Max retry attempts ({config.max_attempts}) reached for {func.__name__}")
                break

            delay = calculate_delay(attempt, config)
            logger.warning(f"Attempt {attempt}/{config.max_attempts} failed for {func.__name__}: {e}. Retrying in {delay:.2f}s")
            time.sleep(delay)

    raise last_exception

def retry_decorator(config: RetryConfig):
    """Decorator for automatic retry with exponential backoff"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            return retry_call(func, config, *args, **kwargs)
        return wrapper
    return decorator

# Only transport-level failures are retried; an HTTP error status is an answer
BANK_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    base_delay=0.2,
    max_delay=2.0,
    retryable_exceptions=[
        requests.exceptions.ConnectionError,
        requests.exceptions.Timeout,
    ]
)
