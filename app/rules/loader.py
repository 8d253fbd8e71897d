# app/rules/loader.py

import json
from pathlib import Path
from typing import Any, Dict

RULES_DIR = Path(__file__).resolve().parent


def load_json(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.is_absolute():
        p = RULES_DIR / p
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)
