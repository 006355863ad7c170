"""
Option selection for variable-recipe items at the terminal.

OptionSelection tracks which options the cashier has ticked for one unit
of a menu item, enforcing radio semantics for single-selection groups and
checkbox semantics for multiple-selection groups, and tells whether the
selection may be added to the cart (every required group answered).
"""

import logging
from typing import Any, Iterable, List, Set

from ..schemas.pos import CartLine
from .costing import calculate_actual_cogs, calculate_item_price

logger = logging.getLogger(__name__)


class UnknownOptionError(Exception):
    """Raised when an option id does not belong to the menu item."""

    def __init__(self, menu_item_name: str, option_id: str):
        self.menu_item_name = menu_item_name
        self.option_id = option_id
        super().__init__(f"Option {option_id} does not belong to {menu_item_name}")


class OptionSelection:
    """Selected options for one unit of a menu item."""

    def __init__(self, menu_item: Any):
        self.menu_item = menu_item
        self._selected_ids: Set[str] = set()

    @property
    def groups(self) -> List[Any]:
        return list(self.menu_item.option_groups or [])

    def _find(self, option_id: str):
        for group in self.groups:
            for option in group.options or []:
                if option.id == option_id:
                    return group, option
        raise UnknownOptionError(self.menu_item.name, option_id)

    def toggle(self, option_id: str) -> None:
        """
        Tick or untick an option.

        In a multiple-selection group this flips the option. In a
        single-selection group it clears the group and selects the option.
        """
        group, option = self._find(option_id)
        if group.multiple_selection:
            if option.id in self._selected_ids:
                self._selected_ids.discard(option.id)
            else:
                self._selected_ids.add(option.id)
        else:
            for opt in group.options or []:
                self._selected_ids.discard(opt.id)
            self._selected_ids.add(option.id)

    def select_many(self, option_ids: Iterable[str]) -> None:
        for option_id in option_ids:
            self.toggle(option_id)

    @property
    def selected_ids(self) -> Set[str]:
        return set(self._selected_ids)

    @property
    def selected_options(self) -> List[Any]:
        """Selected options in group order, then option order."""
        return [
            option
            for group in self.groups
            for option in (group.options or [])
            if option.id in self._selected_ids
        ]

    @property
    def can_confirm(self) -> bool:
        """True when every required group has at least one selection."""
        for group in self.groups:
            if not group.is_required:
                continue
            if not any(opt.id in self._selected_ids for opt in (group.options or [])):
                return False
        return True

    @property
    def unit_price(self) -> float:
        return calculate_item_price(self.menu_item, self.selected_options)

    @property
    def actual_cogs(self) -> float:
        return calculate_actual_cogs(self.menu_item, self.selected_options)

    @property
    def display_text(self) -> str:
        return ", ".join(opt.name for opt in self.selected_options)

    def to_cart_line(self) -> CartLine:
        """Build the cart line for this selection. Raises ValueError if a required group is empty."""
        if not self.can_confirm:
            raise ValueError(f"Required options missing for {self.menu_item.name}")
        selected = self.selected_options
        return CartLine(
            menu_item_id=self.menu_item.id,
            name=self.menu_item.name,
            price=self.unit_price,
            selected_option_ids=[opt.id for opt in selected] or None,
            selected_options_display=self.display_text or None,
        )
