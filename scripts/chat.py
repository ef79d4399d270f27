"""Terminal chat with BurmaFoodie against a running API.

Commands:
    /image <path> [text]  attach a photo (optionally with a message)
    /lang <code|auto>     response language: en, th, my, zh or auto-detect
    /clear                clear the saved history
    /quit                 exit
"""
import argparse
import asyncio
import base64
import mimetypes
from pathlib import Path

from burmafoodie.client.controller import ChatController
from burmafoodie.client.storage import LocalStorage
from burmafoodie.client.transport import RecipeClient
from burmafoodie.config import settings
from burmafoodie.schemas.recipe import (
    Clarification,
    ErrorResponse,
    Greeting,
    IngredientSuggestion,
    Recipe,
)


def image_to_data_uri(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    data = base64.b64encode(path.read_bytes()).decode("ascii")
    return "data:{};base64,{}".format(mime or "image/jpeg", data)


def render(message) -> str:
    content = message.content
    if isinstance(content, Recipe):
        lines = ["## {}  ({})".format(content.dish_name, content.calories), "", "Ingredients:"]
        lines += ["  - {}: {}".format(i.name, i.amount) for i in content.ingredients]
        lines += ["", "Instructions:"]
        lines += ["  {}. {}".format(n, step) for n, step in enumerate(content.instructions, 1)]
        return "\n".join(lines)
    if isinstance(content, IngredientSuggestion):
        lines = ["## {}".format(content.heading)]
        lines += ["  * {}: {}".format(s.dish_name, s.description) for s in content.suggestions]
        return "\n".join(lines)
    if isinstance(content, (Greeting, Clarification)):
        return content.text
    if isinstance(content, ErrorResponse):
        return "[!] {}".format(content.error)
    return message.text or ""


async def run(controller: ChatController):
    for msg in controller.chat_history:
        print("you> " + (msg.text or "") if msg.role == "user" else render(msg))

    while True:
        try:
            line = await asyncio.to_thread(input, "you> ")
        except EOFError:
            break
        line = line.strip()
        if not line:
            continue
        if line == "/quit":
            break
        if line == "/clear":
            controller.clear_history()
            print("History cleared.")
            continue
        if line.startswith("/lang"):
            code = line[len("/lang"):].strip()
            try:
                controller.set_language(None if code in ("", "auto") else code)
            except ValueError as e:
                print(e)
                continue
            print("Language: {}".format(controller.language or "auto"))
            continue

        image = None
        text = line
        if line.startswith("/image"):
            parts = line[len("/image"):].strip().split(maxsplit=1)
            if not parts:
                print("Usage: /image <path> [text]")
                continue
            path = Path(parts[0]).expanduser()
            if not path.is_file():
                print("No such file: {}".format(path))
                continue
            image = image_to_data_uri(path)
            text = parts[1] if len(parts) > 1 else ""

        print("BurmaFoodie is thinking...")
        await controller.send_message(text, image)
        print(render(controller.chat_history[-1]))
        print()


def main():
    parser = argparse.ArgumentParser(description="Chat with BurmaFoodie in the terminal")
    parser.add_argument("--url", default=settings.recipe_api_url)
    parser.add_argument("--history", default=str(settings.history_path))
    parser.add_argument("--lang", default=None, help="en, th, my or zh (default: auto-detect)")
    parser.add_argument("--raw", action="store_true", help="Send text without the recipe wrapper")
    parser.add_argument("--timeout", type=float, default=settings.client_timeout_s)
    args = parser.parse_args()

    controller = ChatController(
        RecipeClient(args.url, timeout=args.timeout),
        LocalStorage(args.history),
        language=args.lang,
        wrap_text_prompts=not args.raw,
    )

    print("=" * 60)
    print("BurmaFoodie - {}".format(args.url))
    print("=" * 60)
    asyncio.run(run(controller))


if __name__ == "__main__":
    main()
