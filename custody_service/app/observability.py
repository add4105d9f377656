from custody_service.app.config import settings
import logging
from opentelemetry import trace, metrics
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader, ConsoleMetricExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME as ResourceAttributesServiceName
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from pythonjsonlogger import jsonlogger


logger = logging.getLogger("custody_service")

def setup_json_logging():
    root_logger = logging.getLogger()
    if any(isinstance(h.formatter, jsonlogger.JsonFormatter) for h in root_logger.handlers):
        return
    logHandler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(module)s %(funcName)s %(lineno)d %(otelTraceID)s %(otelSpanID)s %(message)s",
        rename_fields={"levelname": "level", "name": "logger_name", "asctime": "timestamp"},
    )
    logHandler.setFormatter(formatter)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(logHandler)
    log_level = settings.LOG_LEVEL.upper()
    root_logger.setLevel(log_level)
    logger.setLevel(log_level)
    logger.info(f"JSON logging configured at level {log_level}.")

def _otlp_endpoint(signal: str) -> str:
    endpoint_url = settings.OTEL_EXPORTER_OTLP_ENDPOINT_HTTP
    if not endpoint_url.endswith(f"/v1/{signal}"):
        endpoint_url = f"{endpoint_url.rstrip('/')}/v1/{signal}"
    return endpoint_url

def setup_opentelemetry(service_name: str):
    resource = Resource(attributes={
        ResourceAttributesServiceName: service_name,
    })
    tracer_provider = TracerProvider(resource=resource)
    if settings.OTEL_CONSOLE_EXPORT:
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT_HTTP:
        logger.info(f"Configuring OTLP/HTTP Span Exporter. Endpoint: {_otlp_endpoint('traces')}")
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=_otlp_endpoint("traces"))))
    else:
        logger.info("OTLP/HTTP Span Exporter not configured (OTEL_EXPORTER_OTLP_ENDPOINT_HTTP not set).")
    trace.set_tracer_provider(tracer_provider)
    logger.info(f"OpenTelemetry TracerProvider configured for service: {service_name}.")
    # Adds otelTraceID/otelSpanID to every log record; the JSON formatter above already emits them
    LoggingInstrumentor().instrument(set_logging_format=False)

    metric_readers = []
    if settings.OTEL_CONSOLE_EXPORT:
        metric_readers.append(PeriodicExportingMetricReader(ConsoleMetricExporter(), export_interval_millis=5000))
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT_HTTP:
        logger.info(f"Configuring OTLP/HTTP Metric Exporter. Endpoint: {_otlp_endpoint('metrics')}")
        otlp_metric_exporter = OTLPMetricExporter(endpoint=_otlp_endpoint("metrics"))
        metric_readers.append(PeriodicExportingMetricReader(otlp_metric_exporter, export_interval_millis=5000))
    meter_provider = MeterProvider(resource=resource, metric_readers=metric_readers)
    metrics.set_meter_provider(meter_provider)
    logger.info(f"OpenTelemetry MeterProvider configured for service: {service_name}.")

# Call at module load time
setup_json_logging()

# --- Tracer and Meter instances ---
# Proxies: they bind to the SDK providers once an entry point calls setup_opentelemetry.
tracer = trace.get_tracer("custody_service.tracer")
meter = metrics.get_meter("custody_service.meter")

# --- Custom Metrics Definitions ---
release_requests_created_counter = meter.create_counter(
    name="custody.release_requests.created.total",
    description="Counts the release requests filed against assets.",
    unit="1"
)

release_requests_processed_counter = meter.create_counter(
    name="custody.release_requests.processed.total",
    description="Counts release request transitions, partitioned by new status.",
    unit="1"
)
logger.info("Custom metrics (Counters) defined in observability.py.")
