# garden_nav/domain/terrain/terrain.py
import math

import numpy as np

from garden_nav.app.protocols import Terrain


class FlatTerrain(Terrain):
    def __init__(self, height: float = 0.0):
        self.height = height

    def height_at(self, x: float, z: float) -> float:
        return self.height


class HeightmapTerrain(Terrain):
    """
    Nearest-pixel lookup into a square ground of side ``ground_width`` centered
    on the origin. UVs wrap, so ``repeat > 1`` tiles the map across the ground.
    """

    def __init__(
        self,
        data,
        *,
        ground_width: float,
        repeat: float = 1.0,
        scale: float = 1.0,
        offset: float = 0.0,
    ):
        if not ground_width > 0:
            raise ValueError(f"ground_width must be > 0, got {ground_width!r}")
        self.data = np.asarray(data, dtype=np.float32)
        if self.data.size == 0:
            self.data = self.data.reshape(0, 0)
        if self.data.ndim != 2:
            raise ValueError(f"heightmap must be 2D, got shape {self.data.shape}")
        self.ground_width, self.repeat = float(ground_width), float(repeat)
        self.scale, self.offset = float(scale), float(offset)

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    def _uv(self, c: float) -> float:
        u = (c / self.ground_width + 0.5) * self.repeat
        return u - math.floor(u)

    def sample(self, x: float, z: float) -> float:
        """Raw map value at world (x, z), before scale/offset."""
        h, w = self.data.shape
        if not w or not h:
            return 0.0
        px = min(w - 1, int(self._uv(x) * w))
        py = min(h - 1, int(self._uv(z) * h))
        return float(self.data[py, px])

    def height_at(self, x: float, z: float) -> float:
        return self.sample(x, z) * self.scale + self.offset
