from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Hotel Booking Core Metrics Collector

    Tracks lifecycle outcomes, date conflicts and read-through cache effectiveness.
    """

    def __init__(self) -> None:
        # ========== Booking Lifecycle Metrics ==========
        self.booking_operations = Counter(
            'booking_operations_total',
            'Booking lifecycle operations by outcome',
            ['operation', 'result'],  # operation: create/cancel, result: success/<error kind>
        )

        self.booking_conflicts = Counter(
            'booking_conflicts_total',
            'Create requests rejected because of an overlapping active booking',
        )

        self.booking_create_duration = Histogram(
            'booking_create_duration_seconds',
            'Time spent inside the create-booking critical section',
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

        # ========== Cache Metrics ==========
        self.cache_requests = Counter(
            'booking_cache_requests_total',
            'Read-through cache lookups',
            ['scope', 'result'],  # scope: user/all, result: hit/miss/error
        )

        self.cache_invalidation_errors = Counter(
            'booking_cache_invalidation_errors_total',
            'Cache invalidations that failed and were skipped',
        )

    # ========== Helper Methods ==========

    def record_operation(self, *, operation: str, result: str) -> None:
        self.booking_operations.labels(operation=operation, result=result).inc()

    def record_conflict(self) -> None:
        self.booking_conflicts.inc()

    def record_cache_lookup(self, *, scope: str, result: str) -> None:
        self.cache_requests.labels(scope=scope, result=result).inc()

    def record_invalidation_error(self) -> None:
        self.cache_invalidation_errors.inc()


# Global metrics instance
metrics = BookingMetrics()
