from __future__ import annotations

import base64
import csv
import io
import json
import random
from typing import Any, Dict, List, Optional, Tuple

from .schemas import Item, RequirementSet

NUTRIENT_KEYS = ("protein", "carbs", "fat", "fiber", "vitamins")
NUTRIENT_NAMES = ["Protein (g)", "Carbohydrates (g)", "Fat (g)", "Fiber (g)", "Vitamins (%DV)"]
_KEY_ALIASES = {"carbohydrates": "carbs", "price": "cost", "unit_cost": "cost"}

REFERENCE_FOODS: List[Item] = [
    Item(name="Oatmeal", unit_cost=0.50, nutrients=[5.0, 27.0, 3.0, 4.0, 15.0]),
    Item(name="Chicken Breast", unit_cost=3.00, nutrients=[31.0, 0.0, 3.6, 0.0, 10.0]),
    Item(name="Brown Rice", unit_cost=0.30, nutrients=[2.6, 23.0, 0.9, 1.8, 5.0]),
    Item(name="Broccoli", unit_cost=1.50, nutrients=[2.8, 7.0, 0.4, 2.6, 135.0]),
    Item(name="Banana", unit_cost=0.25, nutrients=[1.3, 27.0, 0.3, 3.1, 17.0]),
    Item(name="Eggs", unit_cost=2.00, nutrients=[13.0, 1.1, 11.0, 0.0, 15.0]),
    Item(name="Almonds", unit_cost=4.50, nutrients=[21.0, 22.0, 49.0, 12.0, 26.0]),
    Item(name="Milk", unit_cost=1.20, nutrients=[8.0, 12.0, 8.0, 0.0, 50.0]),
    Item(name="Spinach", unit_cost=2.00, nutrients=[2.9, 3.6, 0.4, 2.2, 188.0]),
    Item(name="Sweet Potato", unit_cost=0.80, nutrients=[1.6, 20.0, 0.1, 3.0, 384.0]),
]

REQUIREMENT_PRESETS: Dict[str, RequirementSet] = {
    "standard-adult": RequirementSet(minimums=[50.0, 130.0, 44.0, 25.0, 100.0], names=NUTRIENT_NAMES),
    "high-protein": RequirementSet(minimums=[100.0, 100.0, 40.0, 30.0, 100.0], names=NUTRIENT_NAMES),
    "low-carb": RequirementSet(minimums=[75.0, 50.0, 70.0, 25.0, 100.0], names=NUTRIENT_NAMES),
    "balanced": RequirementSet(minimums=[60.0, 150.0, 50.0, 30.0, 120.0], names=NUTRIENT_NAMES),
}


def parse_food_table(
    file_content: str,
    file_format: str = "auto",
    encoding: str = "utf-8",
    is_base64: bool = False,
) -> List[Item]:
    """
    Parse a food table into Items.

    Rows need a ``name`` and ``cost`` column plus one column per nutrient in
    ``NUTRIENT_KEYS`` (``carbohydrates`` is accepted for ``carbs``). CSV and
    JSON (a list of objects) are supported.
    """

    if is_base64:
        try:
            content = base64.b64decode(file_content).decode(encoding)
        except (ValueError, UnicodeDecodeError) as exc:
            raise ValueError(f"Failed to decode base64 content: {exc}") from exc
    else:
        content = file_content

    if file_format == "auto":
        file_format = _detect_format(content)

    if file_format in ("csv", "tsv"):
        delimiter = "\t" if file_format == "tsv" else ","
        rows: List[Dict[str, Any]] = list(csv.DictReader(io.StringIO(content.strip()), delimiter=delimiter))
    elif file_format == "json":
        try:
            rows = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON food table: {exc}") from exc
        if not isinstance(rows, list):
            raise ValueError("JSON food table must be a list of objects.")
    else:
        raise ValueError(f"Unsupported food table format '{file_format}'.")

    if not rows:
        raise ValueError("Food table is empty.")
    return [_row_to_item(idx, row) for idx, row in enumerate(rows)]


def _detect_format(content: str) -> str:
    stripped = content.strip()
    if stripped.startswith("[") or stripped.startswith("{"):
        return "json"
    first_line = stripped.split("\n", 1)[0]
    if "\t" in first_line and "," not in first_line:
        return "tsv"
    return "csv"


def _row_to_item(idx: int, row: Dict[str, Any]) -> Item:
    normalised = {
        _KEY_ALIASES.get(str(key).strip().lower(), str(key).strip().lower()): value
        for key, value in row.items()
    }
    name = normalised.get("name")
    if not name:
        raise ValueError(f"Row {idx} has no food name.")
    missing = [key for key in ("cost",) + NUTRIENT_KEYS if key not in normalised]
    if missing:
        raise ValueError(f"Food '{name}' is missing columns: {', '.join(missing)}.")
    try:
        cost = float(normalised["cost"])
        nutrients = [float(normalised[key]) for key in NUTRIENT_KEYS]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Food '{name}' has a non-numeric value: {exc}") from exc
    return Item(name=str(name).strip(), unit_cost=cost, nutrients=nutrients)


def item_to_row(item: Item) -> Dict[str, Any]:
    row: Dict[str, Any] = {"name": item.name, "cost": item.unit_cost}
    row.update(zip(NUTRIENT_KEYS, item.nutrients))
    return row


def generate_random_instance(
    num_items: int, num_nutrients: int, seed: Optional[int] = None
) -> Tuple[List[Item], RequirementSet]:
    """Random diet instance where every nutrient has at least one supplier."""

    rng = random.Random(seed)
    items = [
        Item(
            name=f"food_{j}",
            unit_cost=round(rng.uniform(0.1, 5.0), 2),
            nutrients=[round(rng.uniform(0.0, 30.0), 1) for _ in range(num_nutrients)],
        )
        for j in range(num_items)
    ]
    for i in range(num_nutrients):
        if all(item.nutrients[i] == 0.0 for item in items):
            j = rng.randrange(num_items)
            nutrients = list(items[j].nutrients)
            nutrients[i] = 1.0
            items[j] = items[j].model_copy(update={"nutrients": nutrients})
    minimums = [round(rng.uniform(10.0, 150.0), 1) for _ in range(num_nutrients)]
    return items, RequirementSet(minimums=minimums)
