"""Recipe endpoints.

Listing is public; every other route sits behind the authorization gate.
"""

from __future__ import annotations

from flask import Blueprint, request

from recipes_api.api.deps import gate, json_response, recipe_service, timing
from recipes_api.schemas import MessageSchema, RecipeSchema
from recipes_api.services._shared.errors import ServiceError

public_bp = Blueprint("recipes_public", __name__)
bp = Blueprint("recipes", __name__)
gate.protect(bp)

recipe_schema = RecipeSchema()
recipes_schema = RecipeSchema(many=True)
message_schema = MessageSchema()


@public_bp.get("")
@timing
def list_recipes():
    """Return every recipe, served from the cache when it is warm."""
    service = recipe_service()
    try:
        listing = service.list_recipes()
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(listing)


@bp.post("")
@timing
def create_recipe():
    """Create a recipe; id and ``publishedAt`` are assigned by the server."""
    data = recipe_schema.load(request.get_json(silent=True) or {})
    service = recipe_service()
    try:
        recipe = service.create(data)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(recipe_schema.dump(recipe))


@bp.get("/search")
@timing
def search_recipes():
    """Return recipes carrying the ``tag`` query parameter."""
    tag = request.args.get("tag", "")
    service = recipe_service()
    try:
        recipes = service.search(tag)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(recipes_schema.dump(recipes))


@bp.get("/<string:recipe_id>")
@timing
def get_recipe(recipe_id: str):
    """Return one recipe; 404 when the id is unknown."""
    service = recipe_service()
    try:
        recipe = service.get(recipe_id)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(recipe_schema.dump(recipe))


@bp.put("/<string:recipe_id>")
@timing
def update_recipe(recipe_id: str):
    """Replace a recipe's name, tags, ingredients and instructions."""
    data = recipe_schema.load(request.get_json(silent=True) or {})
    service = recipe_service()
    try:
        service.update(recipe_id, data)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(message_schema.dump({"message": "Recipe has been updated"}))


@bp.delete("/<string:recipe_id>")
@timing
def delete_recipe(recipe_id: str):
    """Delete a recipe; answers 200 whether or not it existed."""
    service = recipe_service()
    try:
        deleted = service.delete(recipe_id)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    message = "Recipe has been deleted" if deleted else "No recipes have been deleted"
    return json_response(message_schema.dump({"message": message}))
