from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

RECIPE_REQUESTS = Counter(
    "burmafoodie_recipe_requests_total",
    "Recipe requests by outcome",
    ["outcome"],
)

LLM_REQUEST_DURATION = Histogram(
    "burmafoodie_llm_request_duration_seconds",
    "Duration of the model call",
    buckets=[0.5, 1.0, 2.0, 3.0, 5.0, 8.0, 13.0, 20.0, 30.0],
)

LLM_FAILURES = Counter(
    "burmafoodie_llm_failures_total",
    "Model calls that raised or returned unusable output",
    ["reason"],
)


def setup_metrics(app):
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/metrics", "/docs", "/openapi.json"],
    ).instrument(app).expose(app, endpoint="/metrics")
