from prometheus_client import Counter, Histogram


class ReservationMetrics:
    """
    Reservation engine metrics

    Tracks how reserve requests end and how many tickets move in and out of
    inventory, which is what an on-call engineer looks at during an on-sale.
    """

    def __init__(self) -> None:
        self.reservation_requests = Counter(
            'reservation_requests_total',
            'Total reserve requests by outcome',
            ['result'],  # granted/insufficient/not_found/invalid
        )

        self.reservation_tickets = Counter(
            'reservation_tickets_total',
            'Tickets taken from or returned to inventory',
            ['operation'],  # reserved/released
        )

        self.reservation_duration = Histogram(
            'reservation_duration_seconds',
            'Reserve request processing time',
            ['result'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

    def record_reserve(self, *, result: str, duration: float, tickets: int = 0) -> None:
        self.reservation_requests.labels(result=result).inc()
        self.reservation_duration.labels(result=result).observe(duration)
        if tickets:
            self.reservation_tickets.labels(operation='reserved').inc(tickets)

    def record_release(self, *, tickets: int) -> None:
        self.reservation_tickets.labels(operation='released').inc(tickets)


# Global metrics instance
metrics = ReservationMetrics()
