from recipes_api.models.recipe import Recipe, RecipeTag
from recipes_api.models.user import User

__all__ = ["Recipe", "RecipeTag", "User"]
