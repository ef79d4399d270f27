import logging

from fastapi import APIRouter, HTTPException

from burmafoodie.dependencies import RecipeHandlerDep
from burmafoodie.schemas.recipe import RecipeRequest
from burmafoodie.services.recipe import RecipeHandlerError

logger = logging.getLogger("burmafoodie")
router = APIRouter()


@router.post("/recipe", summary="Recipe, suggestions or reply for one chat input")
async def recipe(req: RecipeRequest, handler: RecipeHandlerDep) -> dict:
    """Sends one prompt (and optional photo) to BurmaFoodie AI.

    The reply is a single JSON object tagged by `responseType`:
    `recipe`, `ingredientSuggestion`, `greeting`, `clarification` or `error`.
    A model-side `error` (e.g. unknown dish) is a normal 200 reply.

    **Example:** `{"prompt": "Provide the recipe for: Mohinga"}`
    """
    try:
        return await handler.handle(req)
    except RecipeHandlerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
