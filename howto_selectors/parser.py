import json
import logging
from copy import deepcopy
from typing import Any, Dict, List, Tuple

from howto_selectors.selector_transform import transform_selector

logger = logging.getLogger(__name__)


class StepFileError(ValueError):

    pass


def rewrite_step_selectors(steps: List[Dict[str, Any]], strict: bool = False) -> List[Dict[str, Any]]:
    rewritten = []
    for index, step in enumerate(steps):
        step = deepcopy(step)
        selector = step.get("selector")
        if isinstance(selector, str):
            transformed = transform_selector(selector, strict=strict)
            if transformed != selector:
                logger.info(f"Step {index + 1} ({step.get('type', 'unknown')}): {selector} → {transformed}")
            step["selector"] = transformed
        rewritten.append(step)
    return rewritten


def _extract_steps(data: Any, file_path: str) -> List[Dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get("steps")
    if not isinstance(data, list) or not all(isinstance(step, dict) for step in data):
        raise StepFileError(f"{file_path}: expected a list of steps or an object with a 'steps' list")
    return data


def process_file(file_path: str, strict: bool = False) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StepFileError(f"Could not read step file {file_path}: {e}") from e

    steps = _extract_steps(data, file_path)
    return steps, rewrite_step_selectors(steps, strict=strict)
