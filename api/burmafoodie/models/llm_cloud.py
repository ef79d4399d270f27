import logging
from dataclasses import dataclass

import anthropic

from burmafoodie.config import Settings

logger = logging.getLogger("burmafoodie")


@dataclass(frozen=True)
class ImagePart:
    mime_type: str
    data: str  # raw base64, no data: prefix


class ClaudeLLM:
    def __init__(self, client: anthropic.AsyncAnthropic, settings: Settings):
        self.client = client
        self.model = settings.claude_model
        self.max_tokens = settings.claude_max_tokens
        self.temperature = settings.claude_temperature

    async def generate(
        self, system: str, prompt: str, image: ImagePart | None = None
    ) -> str:
        """Single blocking call to Claude. Returns the concatenated text reply."""
        content: list[dict] = []
        if image is not None:
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.mime_type,
                    "data": image.data,
                },
            })
        if prompt.strip():
            content.append({"type": "text", "text": prompt})

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=system,
            messages=[{"role": "user", "content": content}],
        )

        return "".join(
            block.text for block in response.content if block.type == "text"
        )


def load_llm_cloud(settings: Settings) -> ClaudeLLM:
    logger.info("Initializing Claude LLM client (%s)", settings.claude_model)
    # max_retries=0: one attempt per request, failures go back to the user
    client = anthropic.AsyncAnthropic(
        api_key=settings.anthropic_api_key, max_retries=0
    )
    return ClaudeLLM(client, settings)
