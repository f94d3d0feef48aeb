from prometheus_client import Counter, Histogram


class TicketingMetrics:
    """
    Capacity ledger and payment metrics

    Exposed on /metrics. Label cardinality stays bounded: results and event
    names only, never slot or booking ids.
    """

    def __init__(self) -> None:
        # ========== Capacity Ledger ==========
        self.capacity_reservations = Counter(
            'capacity_reservations_total',
            'Time-slot reservation attempts',
            ['source', 'result'],  # result: reserved/full/not_found
        )

        self.capacity_reservation_duration = Histogram(
            'capacity_reservation_duration_seconds',
            'Atomic reservation statement duration',
            ['source'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

        self.capacity_releases = Counter(
            'capacity_releases_total',
            'Tickets released back to time slots',
            ['reason'],  # reason: cart_removed/cart_expired/cancelled/refunded
        )

        self.cart_items_expired = Counter(
            'cart_items_expired_total',
            'Expired cart items released by the sweeper or lazy release',
            ['trigger'],  # trigger: sweeper/read
        )

        # ========== Payments ==========
        self.webhook_events = Counter(
            'payment_webhook_events_total',
            'Gateway webhook events received',
            ['event', 'result'],
        )

        self.bookings_materialized = Counter(
            'bookings_materialized_total',
            'Bookings created from paid order snapshots',
            ['result'],  # result: created/replayed/lapsed
        )

    def record_reservation(self, *, source: str, result: str, duration: float) -> None:
        self.capacity_reservations.labels(source=source, result=result).inc()
        self.capacity_reservation_duration.labels(source=source).observe(duration)

    def record_release(self, *, reason: str, quantity: int) -> None:
        self.capacity_releases.labels(reason=reason).inc(quantity)

    def record_expired(self, *, trigger: str, count: int) -> None:
        if count:
            self.cart_items_expired.labels(trigger=trigger).inc(count)

    def record_webhook(self, *, event: str, result: str) -> None:
        self.webhook_events.labels(event=event, result=result).inc()

    def record_materialized(self, *, result: str, count: int = 1) -> None:
        self.bookings_materialized.labels(result=result).inc(count)


# Global metrics instance
metrics = TicketingMetrics()
