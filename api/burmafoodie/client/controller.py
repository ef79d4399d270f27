import logging
from typing import Any, Callable, Protocol

from burmafoodie.client.storage import LocalStorage, load_history, save_history
from burmafoodie.schemas.chat import ChatMessage, new_message_id
from burmafoodie.schemas.recipe import ErrorResponse, parse_model_response, summarize
from burmafoodie.services.prompts import LANGUAGE_NAMES

logger = logging.getLogger("burmafoodie")

UNREADABLE_REPLY_ERROR = "Sorry, I couldn't understand the response. Please try again."


class RecipeTransport(Protocol):
    async def get_recipe(
        self, prompt: str, image: str | None = None, language: str | None = None
    ) -> dict[str, Any]: ...


def derive_prompt(text: str, has_image: bool, wrap_text: bool = True) -> str:
    """Prompt sent to the handler for one user input."""
    text = text.strip()
    if has_image and text:
        return (
            f'The user sent a photo together with this message: "{text}". '
            "Treat the message as the main request and use the photo only as "
            "supporting context. Respond in the language of the message."
        )
    if has_image:
        return (
            "Identify the Burmese dish in this photo and provide its recipe. "
            "If the photo contains visible text, respond in that language; "
            "otherwise respond in English."
        )
    if wrap_text:
        return f"Provide the recipe for: {text}"
    return text


class ChatController:
    """Owns the chat log and drives one request at a time.

    Every history change is persisted and reported to the registered
    listeners (the UI uses this to scroll to the newest message).
    """

    def __init__(
        self,
        transport: RecipeTransport,
        storage: LocalStorage,
        *,
        language: str | None = None,
        wrap_text_prompts: bool = True,
    ):
        self._transport = transport
        self._storage = storage
        self._language = None
        self._wrap_text = wrap_text_prompts
        self._listeners: list[Callable[[list[ChatMessage]], None]] = []
        self._history: list[ChatMessage] = load_history(storage)
        self.is_loading = False
        self.set_language(language)

    @property
    def chat_history(self) -> list[ChatMessage]:
        return list(self._history)

    @property
    def language(self) -> str | None:
        return self._language

    def set_language(self, language: str | None):
        if language and language not in LANGUAGE_NAMES:
            raise ValueError(
                f"Unsupported language {language!r}; expected one of {sorted(LANGUAGE_NAMES)}"
            )
        self._language = language or None

    def subscribe(self, listener: Callable[[list[ChatMessage]], None]):
        self._listeners.append(listener)

    def _set_history(self, history: list[ChatMessage]):
        self._history = history
        try:
            save_history(self._storage, history)
        except (OSError, ValueError) as e:
            logger.warning("Could not persist chat history: %s", e)
        for listener in self._listeners:
            try:
                listener(self.chat_history)
            except Exception:
                logger.exception("Chat history listener failed")

    def _replace(self, message_id: str, message: ChatMessage):
        self._set_history(
            [message if m.id == message_id else m for m in self._history]
        )

    async def send_message(self, text: str, image: str | None = None):
        text = text or ""
        image = image or None
        if (not text.strip() and not image) or self.is_loading:
            return

        self.is_loading = True
        try:
            placeholder = ChatMessage.placeholder()
            self._set_history([*self._history, ChatMessage.user(text, image), placeholder])

            try:
                prompt = derive_prompt(text, image is not None, self._wrap_text)
                data = await self._transport.get_recipe(prompt, image, self._language)
            except Exception as e:
                logger.error("Recipe request failed: %s", e)
                detail = str(e) or "An unexpected error occurred."
                content = ErrorResponse(error=f"Sorry, something went wrong: {detail}")
            else:
                try:
                    content = parse_model_response(data)
                except ValueError as e:
                    logger.error("Unusable recipe reply: %s | data=%r", e, data)
                    content = ErrorResponse(error=UNREADABLE_REPLY_ERROR)

            self._replace(
                placeholder.id,
                ChatMessage(
                    id=new_message_id("model"),
                    role="model",
                    text=summarize(content),
                    content=content,
                ),
            )
        finally:
            self.is_loading = False

    def clear_history(self):
        self._set_history([])
