from typing import Annotated

from fastapi import Depends, Request

from burmafoodie.config import Settings
from burmafoodie.services.recipe import RecipeRequestHandler


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_recipe_handler(request: Request) -> RecipeRequestHandler:
    return request.app.state.recipe_handler


SettingsDep = Annotated[Settings, Depends(get_settings)]
RecipeHandlerDep = Annotated[RecipeRequestHandler, Depends(get_recipe_handler)]
