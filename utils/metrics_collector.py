"""
Prometheus metrics collection for monitoring
"""

from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry


class MetricsCollector:
    """Prometheus metrics collector for the UGC dashboard"""

    def __init__(self):
        """Initialize metrics collector with Prometheus metrics"""
        self.registry = CollectorRegistry()

        # API Request metrics
        self.request_count = Counter(
            'ugc_dashboard_requests_total',
            'Total number of API requests',
            ['method', 'endpoint', 'status_code'],
            registry=self.registry
        )

        self.request_duration = Histogram(
            'ugc_dashboard_request_duration_seconds',
            'Request duration in seconds',
            ['method', 'endpoint'],
            registry=self.registry
        )

        # Data source metrics
        self.source_fetches = Counter(
            'ugc_dashboard_source_fetches_total',
            'Data source fetches',
            ['source', 'status'],
            registry=self.registry
        )

        self.source_fetch_duration = Histogram(
            'ugc_dashboard_source_fetch_duration_seconds',
            'Data source fetch duration',
            ['source'],
            registry=self.registry
        )

        # Pipeline metrics
        self.working_set_posts = Gauge(
            'ugc_dashboard_working_set_posts',
            'Valid posts currently held in memory',
            registry=self.registry
        )

        self.dropped_rows = Counter(
            'ugc_dashboard_dropped_rows_total',
            'Rows dropped while building the working set',
            ['reason'],
            registry=self.registry
        )

        self.pipeline_duration = Histogram(
            'ugc_dashboard_pipeline_duration_seconds',
            'Time spent recomputing a dashboard view',
            registry=self.registry
        )

    def track_request(
        self,
        method: str,
        endpoint: str,
        status_code: int,
        duration: float
    ) -> None:
        """
        Track API request metrics

        Args:
            method: HTTP method
            endpoint: API endpoint
            status_code: Response status code
            duration: Request duration in seconds
        """
        self.request_count.labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()

        self.request_duration.labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def track_source_fetch(self, source: str, status: str, duration: float) -> None:
        """
        Track a data source fetch

        Args:
            source: Source name (spreadsheet, supabase)
            status: success or failure
            duration: Fetch duration in seconds
        """
        self.source_fetches.labels(source=source, status=status).inc()
        self.source_fetch_duration.labels(source=source).observe(duration)

    def track_dropped_rows(self, reason: str, count: int) -> None:
        if count:
            self.dropped_rows.labels(reason=reason).inc(count)

    def update_working_set(self, size: int) -> None:
        self.working_set_posts.set(size)

    def track_pipeline(self, duration: float) -> None:
        self.pipeline_duration.observe(duration)


# Global metrics collector
metrics = MetricsCollector()
