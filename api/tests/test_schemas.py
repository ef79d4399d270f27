import pytest
from pydantic import ValidationError

from burmafoodie.schemas.chat import ChatMessage, new_message_id
from burmafoodie.schemas.recipe import (
    Clarification,
    ErrorResponse,
    Greeting,
    IngredientSuggestion,
    Recipe,
    RecipeRequest,
    dump_model_response,
    parse_model_response,
    summarize,
)

from conftest import MOHINGA


class TestParseModelResponse:
    def test_tagged_recipe(self):
        result = parse_model_response(MOHINGA)
        assert isinstance(result, Recipe)
        assert result.dish_name == "Mohinga"
        assert result.ingredients[0].amount == "400g"

    def test_untagged_recipe_is_inferred(self):
        data = {k: v for k, v in MOHINGA.items() if k != "responseType"}
        assert isinstance(parse_model_response(data), Recipe)

    def test_untagged_error_is_inferred(self):
        result = parse_model_response({"error": "Not a Burmese dish."})
        assert isinstance(result, ErrorResponse)
        assert result.error == "Not a Burmese dish."

    def test_untagged_suggestions_are_inferred(self):
        result = parse_model_response({
            "heading": "With chicken and onion you can make",
            "suggestions": [{"dishName": "Chicken curry", "description": "Rich and mild."}],
        })
        assert isinstance(result, IngredientSuggestion)
        assert result.suggestions[0].dish_name == "Chicken curry"

    @pytest.mark.parametrize("tag,cls", [("greeting", Greeting), ("clarification", Clarification)])
    def test_text_variants(self, tag, cls):
        result = parse_model_response({"responseType": tag, "text": "Mingalaba!"})
        assert isinstance(result, cls)

    def test_empty_suggestion_list_is_allowed(self):
        result = parse_model_response({
            "responseType": "ingredientSuggestion", "heading": "Nothing fits", "suggestions": [],
        })
        assert result.suggestions == []

    def test_more_than_three_suggestions_rejected(self):
        item = {"dishName": "x", "description": "y"}
        with pytest.raises(ValidationError):
            parse_model_response({
                "responseType": "ingredientSuggestion", "heading": "h", "suggestions": [item] * 4,
            })

    def test_unknown_tag_rejected(self):
        with pytest.raises(ValidationError):
            parse_model_response({"responseType": "poem", "text": "..."})

    def test_unknown_shape_rejected(self):
        with pytest.raises(ValueError, match="Unrecognized response shape"):
            parse_model_response({"foo": "bar"})

    def test_non_object_rejected(self):
        with pytest.raises(ValueError, match="Expected a JSON object"):
            parse_model_response(["Mohinga"])

    def test_recipe_missing_field_rejected(self):
        data = dict(MOHINGA)
        del data["calories"]
        with pytest.raises(ValidationError):
            parse_model_response(data)


def test_dump_uses_stable_english_keys():
    dumped = dump_model_response(parse_model_response(MOHINGA))
    assert dumped == MOHINGA


def test_summaries():
    assert summarize(parse_model_response(MOHINGA)) == "Mohinga"
    assert summarize(ErrorResponse(error="oops")) == "oops"
    assert summarize(Greeting(text="hello")) == "hello"
    assert summarize(IngredientSuggestion(heading="Ideas", suggestions=[])) == "Ideas"


def test_recipe_request_accepts_camel_case_image():
    req = RecipeRequest.model_validate({"prompt": "p", "imageBase64": "data:image/png;base64,AA=="})
    assert req.image_base64 == "data:image/png;base64,AA=="
    assert req.language is None


class TestChatMessage:
    def test_ids_are_strictly_increasing(self):
        ids = [int(new_message_id("user").split("-")[-1]) for _ in range(50)]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_placeholder(self):
        msg = ChatMessage.placeholder()
        assert msg.role == "model"
        assert msg.is_loading is True
        assert msg.content is None

    def test_storage_form_drops_image_and_loading_flag(self):
        msg = ChatMessage.user("Mohinga", image="data:image/png;base64,AA==")
        stored = msg.to_storage()
        assert stored == {"id": msg.id, "role": "user", "text": "Mohinga"}
