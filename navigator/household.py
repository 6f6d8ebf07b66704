"""
Household inventory and shopping list.

A household shares one inventory of groceries on hand and one list of items
still needed. The inventory names are the owned ingredients handed to the
recipe matcher.

Note: Household objects are plain in-memory state. Persistence lives in the
external food backend; household_from_backend() reads a snapshot from it.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from navigator.backend_client import BackendError, FoodBackendClient

logger = logging.getLogger(__name__)

INVENTORY_CATEGORIES = ["All", "Produce", "Dairy", "Meat", "Pantry", "Bakery", "Frozen"]

DEFAULT_CATEGORY = "Pantry"
DEFAULT_QUANTITY = "1"
DEFAULT_MEMBER = "You"
EXPIRING_THRESHOLD_DAYS = 2


def _new_item_id() -> str:
    return str(uuid.uuid4())


class HouseholdMember(BaseModel):
    """Member of a household, shown next to the items they added."""
    name: str
    avatar: str = "👤"


class InventoryItem(BaseModel):
    """Grocery item currently on hand."""
    id: str = Field(default_factory=_new_item_id)
    name: str
    quantity: str = Field(DEFAULT_QUANTITY, description="Free-text amount (e.g., '2 lbs', '1 gallon')")
    added_by: str = DEFAULT_MEMBER
    expires_in: Optional[int] = Field(None, description="Days until the item expires, None when it keeps")
    category: str = DEFAULT_CATEGORY

    def is_expiring(self, threshold_days: int = EXPIRING_THRESHOLD_DAYS) -> bool:
        """True when the item expires within threshold_days."""
        return self.expires_in is not None and self.expires_in <= threshold_days

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3f1c6a0e-1d2b-4c55-9a43-7d1f0e2b9c11",
                "name": "Milk",
                "quantity": "1 gallon",
                "added_by": "You",
                "expires_in": 3,
                "category": "Dairy",
            }
        }
    )


class Household(BaseModel):
    """Shared household state: members, inventory and shopping list."""
    id: Optional[Union[int, str]] = None
    name: str = "My Household"
    members: List[HouseholdMember] = Field(default_factory=list)
    inventory: List[InventoryItem] = Field(default_factory=list)
    needed: List[str] = Field(default_factory=list, description="Names still to buy, in insertion order")

    def add_item(
        self,
        name: str,
        quantity: str = "",
        added_by: str = DEFAULT_MEMBER,
        category: str = DEFAULT_CATEGORY,
    ) -> Optional[InventoryItem]:
        """
        Add an item to the inventory.

        Args:
            name: Item name (surrounding whitespace is trimmed)
            quantity: Free-text amount; empty becomes "1"
            added_by: Member name
            category: Inventory category

        Returns:
            The new item, or None when the name is blank
        """
        name = name.strip()
        if not name:
            return None

        item = InventoryItem(
            name=name,
            quantity=quantity.strip() or DEFAULT_QUANTITY,
            added_by=added_by,
            category=category,
        )
        self.inventory.append(item)
        return item

    def remove_item(self, item_id: str) -> None:
        """Remove an inventory item; unknown ids are ignored."""
        self.inventory = [item for item in self.inventory if item.id != item_id]

    def filter_inventory(self, category: str = "All") -> List[InventoryItem]:
        if category == "All":
            return list(self.inventory)
        return [item for item in self.inventory if item.category == category]

    def expiring_items(self, threshold_days: int = EXPIRING_THRESHOLD_DAYS) -> List[InventoryItem]:
        return [item for item in self.inventory if item.is_expiring(threshold_days)]

    def add_needed(self, name: str) -> bool:
        """
        Add a name to the shopping list.

        Returns:
            True if added, False for blank names and names already on the list
        """
        name = name.strip()
        if not name or name in self.needed:
            return False
        self.needed.append(name)
        return True

    def remove_needed(self, name: str) -> None:
        self.needed = [n for n in self.needed if n != name]

    def move_to_inventory(self, name: str, added_by: str = DEFAULT_MEMBER) -> Optional[InventoryItem]:
        """
        Mark a shopping list entry as bought.

        The name is removed from the shopping list and added to the inventory
        with quantity "1" in the Pantry category.
        """
        item = self.add_item(name, DEFAULT_QUANTITY, added_by, DEFAULT_CATEGORY)
        self.remove_needed(name)
        return item

    def ingredient_names(self) -> List[str]:
        """Inventory names in inventory order, ready for match_recipes()."""
        return [item.name for item in self.inventory]


def default_household() -> Household:
    """Sample household used when no backend household is available."""
    return Household(
        name="My Household",
        members=[
            HouseholdMember(name="You", avatar="👤"),
            HouseholdMember(name="Alex", avatar="🧑"),
            HouseholdMember(name="Jamie", avatar="👩"),
        ],
        inventory=[
            InventoryItem(name="Milk", quantity="1 gallon", added_by="You", expires_in=3, category="Dairy"),
            InventoryItem(name="Eggs", quantity="12 count", added_by="Alex", expires_in=10, category="Dairy"),
            InventoryItem(name="Bread", quantity="1 loaf", added_by="Jamie", expires_in=5, category="Bakery"),
            InventoryItem(name="Chicken Breast", quantity="2 lbs", added_by="You", expires_in=2, category="Meat"),
            InventoryItem(name="Spinach", quantity="1 bag", added_by="Alex", expires_in=4, category="Produce"),
            InventoryItem(name="Pasta", quantity="2 boxes", added_by="Jamie", category="Pantry"),
            InventoryItem(name="Olive Oil", quantity="1 bottle", added_by="You", category="Pantry"),
            InventoryItem(name="Tomatoes", quantity="6 count", added_by="Alex", expires_in=5, category="Produce"),
        ],
        needed=["Butter", "Onions", "Garlic"],
    )


def _text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)


def _inventory_item_from_row(row: Dict[str, Any]) -> InventoryItem:
    try:
        return InventoryItem(
            id=_text(row.get("id"), _new_item_id()),
            name=_text(row.get("name"), ""),
            quantity=_text(row.get("quantity"), DEFAULT_QUANTITY),
            added_by=_text(row.get("added_by"), DEFAULT_MEMBER),
            expires_in=row.get("expires_in"),
            category=_text(row.get("category"), DEFAULT_CATEGORY),
        )
    except ValidationError as e:
        raise BackendError(f"Invalid inventory row from backend: {e}") from e


def household_from_backend(client: FoodBackendClient, household_id: Union[int, str]) -> Household:
    """
    Build a Household from the backend's inventory and needed-items rows.

    Args:
        client: Backend client
        household_id: Backend household identifier

    Returns:
        Household with inventory and shopping list filled in. Members are the
        distinct added_by values of the inventory, in first-seen order.

    Raises:
        BackendError: If any backend call fails or a row cannot be read
    """
    inventory_rows = client.get_inventory(household_id)
    needed_rows = client.get_needed_items(household_id)

    inventory = [_inventory_item_from_row(row) for row in inventory_rows if row.get("name")]

    needed: List[str] = []
    for row in needed_rows:
        name = _text(row.get("name"), "").strip()
        if name and name not in needed:
            needed.append(name)

    member_names: List[str] = []
    for item in inventory:
        if item.added_by not in member_names:
            member_names.append(item.added_by)

    logger.info(
        "Loaded household %s: %d inventory items, %d needed items",
        household_id, len(inventory), len(needed),
    )
    return Household(
        id=household_id,
        members=[HouseholdMember(name=name) for name in member_names],
        inventory=inventory,
        needed=needed,
    )
