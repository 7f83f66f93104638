"""Observability setup for OpenTelemetry, Prometheus metrics, and structured logging."""

import logging

import structlog
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest
from sqlalchemy.ext.asyncio import AsyncEngine

from .config import Settings

SERVICE_NAME = "tour-guide-api"
SERVICE_VERSION = "1.0.0"

# Prometheus metrics
REGISTRY = CollectorRegistry()

# Request metrics
REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code'],
    registry=REGISTRY
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=REGISTRY
)

# Business metrics
USERS_REGISTERED = Counter(
    'users_registered_total',
    'Total users registered',
    ['user_type'],
    registry=REGISTRY
)

TOUR_REQUESTS_CREATED = Counter(
    'tour_requests_created_total',
    'Total tour requests created',
    registry=REGISTRY
)

TOUR_REQUEST_STATUS_CHANGES = Counter(
    'tour_request_status_changes_total',
    'Total tour request status changes',
    ['status'],
    registry=REGISTRY
)

NOTIFICATIONS_CREATED = Counter(
    'notifications_created_total',
    'Total notifications created',
    ['type'],
    registry=REGISTRY
)

NOTIFICATION_FAILURES = Counter(
    'notification_failures_total',
    'Notifications that could not be stored',
    ['type'],
    registry=REGISTRY
)

REVIEWS_CREATED = Counter(
    'reviews_created_total',
    'Total reviews created',
    ['target_type'],
    registry=REGISTRY
)


def setup_structured_logging(settings: Settings):
    """Configure structured logging with structlog."""

    def add_trace_context(logger, method_name, event_dict):
        """Add trace context to log events."""
        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            event_dict['trace_id'] = format(ctx.trace_id, '032x')
            event_dict['span_id'] = format(ctx.span_id, '016x')
        return event_dict

    structlog.configure(
        processors=[
            # request_id is bound by RequestIDMiddleware
            structlog.contextvars.merge_contextvars,
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _resource(settings: Settings) -> Resource:
    return Resource.create({
        "service.name": SERVICE_NAME,
        "service.version": SERVICE_VERSION,
        "environment": settings.environment,
    })


def setup_tracing(settings: Settings):
    """Setup OpenTelemetry tracing."""
    provider = TracerProvider(resource=_resource(settings))

    if settings.otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(__name__)


def setup_metrics(settings: Settings):
    """Setup OpenTelemetry metrics."""
    if settings.otlp_endpoint:
        otlp_exporter = OTLPMetricExporter(endpoint=settings.otlp_endpoint)
        reader = PeriodicExportingMetricReader(exporter=otlp_exporter, export_interval_millis=60000)
        metrics.set_meter_provider(MeterProvider(resource=_resource(settings), metric_readers=[reader]))

    return metrics.get_meter(__name__)


def instrument_fastapi(app):
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app)


def instrument_sqlalchemy(engine: AsyncEngine):
    """Instrument the application's engine with OpenTelemetry."""
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)


class MetricsCollector:
    """Collector for business metrics."""

    @staticmethod
    def record_request(method: str, endpoint: str, status_code: int, duration: float):
        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)

    @staticmethod
    def record_user_registered(user_type: str):
        USERS_REGISTERED.labels(user_type=user_type).inc()

    @staticmethod
    def record_tour_request_created():
        TOUR_REQUESTS_CREATED.inc()

    @staticmethod
    def record_status_change(status: str):
        """Record a tour request moving to ``status``."""
        TOUR_REQUEST_STATUS_CHANGES.labels(status=status).inc()

    @staticmethod
    def record_notification_created(notification_type: str):
        NOTIFICATIONS_CREATED.labels(type=notification_type).inc()

    @staticmethod
    def record_notification_failed(notification_type: str):
        NOTIFICATION_FAILURES.labels(type=notification_type).inc()

    @staticmethod
    def record_review_created(target_type: str):
        REVIEWS_CREATED.labels(target_type=target_type).inc()


def get_prometheus_metrics():
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()


def get_logger(name: str):
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
