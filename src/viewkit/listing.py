"""Data for entity listing pages.

``EntityListingData`` carries everything a shared listing template needs:
header, grid/list toggle, search and sort controls, action URLs, and the
items themselves. Templates read item attributes directly::

    listing = (
        EntityListingData[Game]("Games", "/games/{id}")
        .with_create("/games/new", "New game")
        .with_htmx("/games/search")
    )
    listing.items = games
"""

from dataclasses import dataclass, field
from typing import Self


@dataclass
class SortOption:
    """One entry in the sort dropdown."""

    value: str
    label: str
    selected: bool = False


def default_sort_options() -> list[SortOption]:
    return [
        SortOption("updated", "Last Modified", selected=True),
        SortOption("name", "Name"),
        SortOption("created", "Date Created"),
    ]


@dataclass
class EntityListingData[T]:
    """Listing page state with sensible defaults.

    Only *title* and *view_url* are needed up front; the ``with_*``
    methods fill the optional parts and return the listing for chaining.
    """

    title: str
    view_url: str
    subtitle: str = ""
    create_url: str = ""
    create_label: str = ""

    # View configuration
    view_mode: str = "grid"  # "grid" or "list"
    view_mode_storage_key: str = "entity-view-mode"  # localStorage key
    enable_view_toggle: bool = True
    grid_container_id: str = "entity-grid"
    search_input_id: str = "search-entities"
    sort_select_id: str = "sort-entities"
    search_placeholder: str = "Search..."

    edit_url: str = ""
    delete_url: str = ""
    search_url: str = ""
    refresh_url: str = ""

    sort_options: list[SortOption] = field(default_factory=default_sort_options)
    items: list[T] = field(default_factory=list)

    show_actions: bool = True
    htmx_enabled: bool = False
    refresh_trigger: str = ""

    empty_title: str = ""
    empty_message: str = ""

    def with_create(self, url: str, label: str) -> Self:
        self.create_url = url
        self.create_label = label
        return self

    def with_edit(self, url: str) -> Self:
        self.edit_url = url
        return self

    def with_delete(self, url: str) -> Self:
        self.delete_url = url
        return self

    def with_htmx(self, search_url: str) -> Self:
        """Enable htmx-driven search against *search_url*."""
        self.htmx_enabled = True
        self.search_url = search_url
        return self

    def select_sort(self, value: str) -> Self:
        """Mark the option matching *value* as selected.

        Unknown values leave the current selection alone.
        """
        if any(option.value == value for option in self.sort_options):
            for option in self.sort_options:
                option.selected = option.value == value
        return self
