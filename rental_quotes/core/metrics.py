"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

quotes_finalized = Counter(
    'quotes_finalized_total',
    'Total quotes finalized and stored in history',
    registry=registry
)

quote_validation_failures = Counter(
    'quote_validation_failures_total',
    'Total finalize attempts rejected by draft validation',
    ['reason'],
    registry=registry
)

rendering_failures = Counter(
    'quote_rendering_failures_total',
    'Total quotes stored without rendered artifacts',
    registry=registry
)

quote_total_amount = Histogram(
    'quote_total_amount',
    'Grand total of finalized quotes',
    buckets=(50, 100, 250, 500, 1000, 2500, 5000, 10000),
    registry=registry
)

store_operations = Counter(
    'store_operations_total',
    'Total key-value store operations',
    ['operation', 'status'],
    registry=registry
)

store_operation_duration = Histogram(
    'store_operation_duration_seconds',
    'Key-value store operation duration in seconds',
    ['operation'],
    registry=registry
)

reservation_counter = Gauge(
    'reservation_counter',
    'Current value of the reservation counter',
    registry=registry
)


def track_store_operation(operation: str):
    """Decorator to track key-value store operation metrics"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
                store_operations.labels(operation=operation, status='success').inc()
                return result
            except Exception:
                store_operations.labels(operation=operation, status='error').inc()
                raise
            finally:
                store_operation_duration.labels(operation=operation).observe(time.time() - start_time)
        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')
