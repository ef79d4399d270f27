from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class RecipeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(default="", description="Prompt text derived by the client")
    image_base64: str | None = Field(
        default=None,
        alias="imageBase64",
        description="Image as a data URI (data:<mime>;base64,<data>)",
    )
    language: str | None = Field(
        default=None,
        description="Response language code (en, th, my, zh). Detected when omitted",
    )


class _Response(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Ingredient(BaseModel):
    name: str
    amount: str


class Recipe(_Response):
    response_type: Literal["recipe"] = Field(default="recipe", alias="responseType")
    dish_name: str = Field(alias="dishName")
    ingredients: list[Ingredient]
    instructions: list[str]
    calories: str


class Suggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dish_name: str = Field(alias="dishName")
    description: str


class IngredientSuggestion(_Response):
    response_type: Literal["ingredientSuggestion"] = Field(
        default="ingredientSuggestion", alias="responseType"
    )
    heading: str
    suggestions: list[Suggestion] = Field(default_factory=list, max_length=3)


class Greeting(_Response):
    response_type: Literal["greeting"] = Field(default="greeting", alias="responseType")
    text: str


class Clarification(_Response):
    response_type: Literal["clarification"] = Field(
        default="clarification", alias="responseType"
    )
    text: str


class ErrorResponse(_Response):
    response_type: Literal["error"] = Field(default="error", alias="responseType")
    error: str


ModelResponse = Annotated[
    Union[Recipe, IngredientSuggestion, Greeting, Clarification, ErrorResponse],
    Field(discriminator="response_type"),
]

_adapter = TypeAdapter(ModelResponse)


def infer_response_type(data: dict[str, Any]) -> str | None:
    """Guess the variant tag of an untagged reply from the keys it carries."""
    if "error" in data:
        return "error"
    if "suggestions" in data:
        return "ingredientSuggestion"
    if "dishName" in data and "ingredients" in data:
        return "recipe"
    return None


def parse_model_response(data: Any) -> ModelResponse:
    """Validate a parsed model reply into one ModelResponse variant.

    Replies without a ``responseType`` tag are tagged structurally first.
    Raises ``pydantic.ValidationError`` (or ``ValueError`` for non-objects
    and unknown shapes).
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    if "responseType" not in data:
        tag = infer_response_type(data)
        if tag is None:
            raise ValueError(f"Unrecognized response shape: keys={sorted(data)}")
        data = {**data, "responseType": tag}
    return _adapter.validate_python(data)


def dump_model_response(response: ModelResponse) -> dict[str, Any]:
    return response.model_dump(by_alias=True)


def summarize(response: ModelResponse) -> str:
    """Human-readable one-liner for a response, used as the message text."""
    if isinstance(response, Recipe):
        return response.dish_name
    if isinstance(response, IngredientSuggestion):
        return response.heading
    if isinstance(response, ErrorResponse):
        return response.error
    return response.text
