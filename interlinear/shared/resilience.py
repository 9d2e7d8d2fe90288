# interlinear/shared/resilience.py
import time
from enum import Enum
from typing import Any, Callable, Coroutine, Dict

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from interlinear.shared.config import settings

logger = structlog.get_logger()

# --- 1. Custom Exceptions ---

class ResilienceError(Exception):
    """Base class for resilience-related errors."""
    pass

class CircuitBreakerOpenError(ResilienceError):
    """Raised when a call is blocked because the Circuit Breaker is OPEN."""
    def __init__(self, service_name: str, reset_timeout: float):
        self.service_name = service_name
        self.reset_timeout = reset_timeout
        super().__init__(f"Circuit Breaker for {service_name} is OPEN. Retrying in {reset_timeout}s.")

# --- 2. Circuit Breaker Implementation ---

class CircuitState(str, Enum):
    CLOSED = "closed"       # Normal operation
    OPEN = "open"           # Failing, blocking requests
    HALF_OPEN = "half_open" # Testing recovery

class CircuitBreaker:
    """
    Implements the Circuit Breaker pattern.

    Stops hammering an external service (the translation gateway) that keeps
    failing, and lets a single probe through once the recovery window passes.
    While that probe runs, other callers are rejected as if the circuit were open.
    Only exceptions raised by the call count as failures; a caller cancelling
    the call (e.g. its own timeout) does not.
    """
    def __init__(self, name: str, failure_threshold: int = 5, recovery_timeout: int = 30):
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout

        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.last_failure_time = 0.0
        self._probe_in_flight = False

    async def a_call(self, func: Callable[..., Coroutine[Any, Any, Any]], *args, **kwargs) -> Any:
        """
        Executes an async function (Coroutine) if the circuit is CLOSED or HALF-OPEN.
        """
        probing = self._check_state()

        try:
            result = await func(*args, **kwargs)
        except Exception:
            self._handle_failure()
            raise
        finally:
            if probing:
                self._probe_in_flight = False
        self._handle_success()
        return result

    def _check_state(self):
        if self.state == CircuitState.OPEN:
            if time.monotonic() - self.last_failure_time > self.recovery_timeout:
                self._transition_to(CircuitState.HALF_OPEN)
            else:
                raise CircuitBreakerOpenError(self.name, self.recovery_timeout)

        if self.state == CircuitState.HALF_OPEN:
            if self._probe_in_flight:
                raise CircuitBreakerOpenError(self.name, self.recovery_timeout)
            self._probe_in_flight = True
            return True
        return False

    def _handle_success(self):
        if self.state == CircuitState.HALF_OPEN:
            self._reset()
        else:
            self.failure_count = 0

    def _handle_failure(self):
        self.failure_count += 1
        self.last_failure_time = time.monotonic()

        if self.state == CircuitState.HALF_OPEN:
            self._transition_to(CircuitState.OPEN)
        elif self.failure_count >= self.failure_threshold:
            self._transition_to(CircuitState.OPEN)

    def _transition_to(self, new_state: CircuitState):
        self.state = new_state
        logger.warning("circuit_breaker_state_change",
                       service=self.name,
                       state=new_state.value,
                       failures=self.failure_count)

    def _reset(self):
        self.failure_count = 0
        self.state = CircuitState.CLOSED
        logger.info("circuit_breaker_recovered", service=self.name)

# Registry to hold singleton instances of breakers
_breakers: Dict[str, CircuitBreaker] = {}

def get_circuit_breaker(service_name: str) -> CircuitBreaker:
    if service_name not in _breakers:
        _breakers[service_name] = CircuitBreaker(
            name=service_name,
            failure_threshold=settings.TRANSLATION_FAILURE_THRESHOLD,
            recovery_timeout=settings.TRANSLATION_RECOVERY_SEC,
        )
    return _breakers[service_name]

# --- 3. Retry Policies (Tenacity) ---

def resource_retrying(attempts: int = 3) -> AsyncRetrying:
    """
    Retry policy for static resource fetches.
    Strategy:
    - Wait: Exponential Backoff (0.5s, 1s, 2s...) up to 5s.
    - Stop: After `attempts` tries.
    - Only transport failures are retried; HTTP status errors are final.
    """
    return AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception_type((httpx.TransportError, TimeoutError)),
        before_sleep=lambda state: logger.warning(
            "resource_fetch_retry",
            attempt=state.attempt_number,
            error=str(state.outcome.exception()) if state.outcome else None,
        ),
        reraise=True,
    )
