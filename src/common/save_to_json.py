import json
from pathlib import Path

from pydantic import BaseModel

from common.logger import logger


def _to_jsonable(data):
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, list | tuple):
        return [_to_jsonable(item) for item in data]
    return data


def save_to_json(data, file_path) -> bool:
    """Save data (plain values or pydantic models) to a JSON file. Returns True on success."""
    try:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

        with Path(file_path).open("w", encoding="utf-8") as f:
            json.dump(_to_jsonable(data), f, ensure_ascii=False, indent=4)

        return True
    except (TypeError, OSError) as e:
        logger.error(f"Error saving to JSON: {e}")
        return False
