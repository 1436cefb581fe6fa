# garden_nav/runtime/resources.py
import json
import logging
from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image

from garden_nav.domain.entities.geography import Node

log = logging.getLogger("garden_nav.resources")


@lru_cache(maxsize=8)
def load_scene_nodes(file: str) -> tuple[Node, ...]:
    """Node records from JSON: a list of {id, x, y, kind} or {"nodes": [...]}."""
    with open(file, encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = raw["nodes"]
    nodes = tuple(Node.from_record(rec) for rec in raw)
    log.info("loaded %d scene nodes from %s", len(nodes), file)
    return nodes


@lru_cache(maxsize=8)
def load_heightmap(file: str) -> np.ndarray:
    """2D float32 array in [0, 1] for images; ``.npy`` arrays are taken as-is."""
    path = Path(file)
    if path.suffix == ".npy":
        data = np.load(path)
    else:
        with Image.open(path) as img:
            data = np.asarray(img.convert("RGB"), dtype=np.float32)[:, :, 0] / 255.0
    data = np.asarray(data, dtype=np.float32)
    if data.ndim != 2:
        raise ValueError(f"heightmap {file!r} must be 2D, got shape {data.shape}")
    return data
