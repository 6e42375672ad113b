"""JSON-file-backed loading of MachineConfig.

Document shape::

    {
      "productList": [
        {"id": "A1", "name": "Sparkling Water", "priceMinorUnits": 120, "stock": 5}
      ],
      "coinInventory": {"200": 5, "100": 10, "50": 10, "20": 20, "10": 50}
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from vending.application.machine_config import MachineConfig
from vending.domain.exceptions import ValidationError
from vending.domain.model.product import Product
from vending.domain.model.value_objects import Denomination, Money


def load_config(file_path: Path) -> MachineConfig:
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValidationError(f"Cannot read config {file_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Config {file_path} is not valid JSON: {exc}") from exc
    return config_from_dict(raw)


def config_from_dict(raw: dict) -> MachineConfig:
    if not isinstance(raw, dict):
        raise ValidationError("Config must be a JSON object")

    products = [_product_to_domain(item) for item in raw.get("productList", [])]
    coins = _coins_to_domain(raw.get("coinInventory", {}))
    return MachineConfig(product_list=products, coin_inventory=coins)


def config_to_dict(config: MachineConfig) -> dict:
    return {
        "productList": [
            {
                "id": p.id,
                "name": p.name,
                "priceMinorUnits": p.price.cents,
                "stock": p.stock,
            }
            for p in config.product_list
        ],
        "coinInventory": {
            str(d.value): n for d, n in config.coin_inventory.items()
        },
    }


# --- Serialization ------------------------------------------------------------


def _product_to_domain(raw: dict) -> Product:
    try:
        return Product(
            id=str(raw["id"]),
            name=str(raw.get("name", raw["id"])),
            price=Money.of(raw["priceMinorUnits"]),
            stock=_stock_to_domain(raw),
        )
    except KeyError as exc:
        raise ValidationError(f"productList entry is missing field {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"productList entry {raw!r} is malformed") from exc


def _stock_to_domain(raw: dict) -> int:
    stock = raw.get("stock", 0)
    if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
        raise ValidationError(
            f"productList stock for {raw.get('id')!r} must be a non-negative integer"
        )
    return stock


def _coins_to_domain(raw: dict) -> dict[Denomination, int]:
    if not isinstance(raw, dict):
        raise ValidationError("coinInventory must be an object of denomination: count")
    coins: dict[Denomination, int] = {}
    for key, count in raw.items():
        denom = Denomination.parse(key)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValidationError(
                f"coinInventory count for {key} must be a non-negative integer"
            )
        coins[denom] = count
    return coins
