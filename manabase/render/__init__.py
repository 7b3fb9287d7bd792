from manabase.render.pages import (
    AllCardsPage,
    CategoryPage,
    build_all_cards_page,
    build_category_page,
    write_output,
)

__all__ = [
    "AllCardsPage",
    "CategoryPage",
    "build_all_cards_page",
    "build_category_page",
    "write_output",
]
