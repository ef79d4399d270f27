import logging
import re
import time
from typing import Any, Callable, Protocol

from burmafoodie.config import Settings
from burmafoodie.middleware.metrics import (
    LLM_FAILURES,
    LLM_REQUEST_DURATION,
    RECIPE_REQUESTS,
)
from burmafoodie.models.llm_cloud import ImagePart, load_llm_cloud
from burmafoodie.schemas.recipe import RecipeRequest
from burmafoodie.services.normalize import parse_model_json
from burmafoodie.services.prompts import build_system_instruction

logger = logging.getLogger("burmafoodie")

_DATA_URI_RE = re.compile(r"^data:([\w.+-]+/[\w.+-]+);base64,(.+)$", re.DOTALL)

GENERIC_ERROR = "Sorry, the server encountered an error. Please try again."
EMPTY_REPLY_ERROR = "Sorry, I received an empty response from the AI. Please try again."
CONFIG_ERROR = "The recipe service is not available right now. Please try again later."
EMPTY_REQUEST_ERROR = "Please send a dish name, a message or a photo."


class RecipeLLM(Protocol):
    async def generate(
        self, system: str, prompt: str, image: ImagePart | None = None
    ) -> str: ...


class RecipeHandlerError(Exception):
    """Failure carrying the HTTP status and the message shown to the user."""

    status_code = 500

    def __init__(self, message: str = GENERIC_ERROR):
        super().__init__(message)
        self.message = message


class InvalidImageError(RecipeHandlerError):
    status_code = 400


class EmptyRequestError(RecipeHandlerError):
    status_code = 400


class ConfigurationError(RecipeHandlerError):
    pass


class ModelOutputError(RecipeHandlerError):
    pass


def parse_data_uri(value: str) -> ImagePart:
    """Split ``data:<mime>;base64,<data>`` into mime type and raw base64."""
    match = _DATA_URI_RE.match(value.strip())
    if not match:
        raise InvalidImageError(
            "Invalid image data. Expected a data:<mime>;base64,<data> URI."
        )
    return ImagePart(mime_type=match.group(1), data=match.group(2))


class RecipeRequestHandler:
    """Turns one recipe request into exactly one model call and a parsed reply.

    There is no retry: a failed call or an unusable reply is reported to the
    caller, who may send again.
    """

    def __init__(
        self,
        settings: Settings,
        llm: RecipeLLM | None = None,
        llm_factory: Callable[[Settings], RecipeLLM] = load_llm_cloud,
    ):
        self._settings = settings
        self._llm = llm
        self._llm_factory = llm_factory

    @property
    def configured(self) -> bool:
        return bool(self._settings.anthropic_api_key)

    def _get_llm(self) -> RecipeLLM:
        if self._llm is None:
            self._llm = self._llm_factory(self._settings)
        return self._llm

    async def handle(self, req: RecipeRequest) -> dict[str, Any]:
        if not self.configured:
            logger.error("ANTHROPIC_API_KEY is not set; rejecting recipe request")
            RECIPE_REQUESTS.labels(outcome="config_error").inc()
            raise ConfigurationError(CONFIG_ERROR)

        image = None
        if req.image_base64:
            try:
                image = parse_data_uri(req.image_base64)
            except InvalidImageError:
                RECIPE_REQUESTS.labels(outcome="invalid_image").inc()
                raise

        if image is None and not req.prompt.strip():
            RECIPE_REQUESTS.labels(outcome="empty_request").inc()
            raise EmptyRequestError(EMPTY_REQUEST_ERROR)

        language = req.language or self._settings.default_language or None
        system = build_system_instruction(language)

        start = time.perf_counter()
        try:
            raw = await self._get_llm().generate(system, req.prompt, image)
        except Exception as e:
            logger.error("Model call failed: %s", e, exc_info=True)
            LLM_FAILURES.labels(reason="exception").inc()
            RECIPE_REQUESTS.labels(outcome="model_error").inc()
            raise ModelOutputError(GENERIC_ERROR) from e
        finally:
            LLM_REQUEST_DURATION.observe(time.perf_counter() - start)

        if not raw or not raw.strip():
            logger.error("Model returned an empty reply")
            LLM_FAILURES.labels(reason="empty").inc()
            RECIPE_REQUESTS.labels(outcome="model_error").inc()
            raise ModelOutputError(EMPTY_REPLY_ERROR)

        try:
            data = parse_model_json(raw)
        except ValueError as e:
            logger.error("Could not parse model reply: %s | raw=%r", e, raw[:500])
            LLM_FAILURES.labels(reason="parse").inc()
            RECIPE_REQUESTS.labels(outcome="model_error").inc()
            raise ModelOutputError(GENERIC_ERROR) from e

        if not isinstance(data, dict):
            logger.error("Model reply is not a JSON object: %r", raw[:500])
            LLM_FAILURES.labels(reason="parse").inc()
            RECIPE_REQUESTS.labels(outcome="model_error").inc()
            raise ModelOutputError(GENERIC_ERROR)

        RECIPE_REQUESTS.labels(outcome="ok").inc()
        logger.info(
            "Recipe request answered: type=%s image=%s language=%s",
            data.get("responseType", "?"), image is not None, language or "auto",
        )
        return data
