import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from garden_nav.domain.entities.geography import NodeKind


def _expand(v: str) -> str:
    return os.path.expandvars(os.path.expanduser(v))


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- SCENE ---------------------


class NodeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)  # world Z
    kind: NodeKind = NodeKind.KEY


class SceneModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    nodes: list[NodeModel] | None = None
    nodes_file: str | None = None

    @field_validator("nodes_file")
    @classmethod
    def _expand_file(cls, v: str | None) -> str | None:
        return None if v is None else _expand(v)

    @model_validator(mode="after")
    def _one_source(self):
        if (self.nodes is None) == (self.nodes_file is None):
            raise ValueError("scene needs exactly one of 'nodes' or 'nodes_file'")
        if self.nodes is not None:
            ids = [n.id for n in self.nodes]
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            if dupes:
                raise ValueError(f"duplicate node ids: {dupes}")
        return self


class GraphModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    neighbor_radius: float = Field(20.0, gt=0)
    max_neighbors: int = Field(8, ge=0)


# ----------------- SEARCH / SMOOTHING ---------------------


class SearchAStarModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["astar"] = "astar"


SearchUnion = Annotated[SearchAStarModel, Field(discriminator="kind")]


class SmootherCollinearModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["collinear"] = "collinear"
    eps: float = Field(0.01, ge=0)


class SmootherNoneModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["none"] = "none"


SmootherUnion = Annotated[
    SmootherCollinearModel | SmootherNoneModel, Field(discriminator="kind")
]

# ----------------- TERRAIN ---------------------


class TerrainFlatModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["flat"] = "flat"
    height: float = 0.0


class TerrainHeightmapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["heightmap"] = "heightmap"
    file: str | None = None  # .npy or an image (red channel)
    data: list[list[float]] | None = None
    ground_width: float = Field(gt=0)
    repeat: float = 1.0
    scale: float = 1.0
    offset: float = 0.0

    @field_validator("file")
    @classmethod
    def _expand_file(cls, v: str | None) -> str | None:
        return None if v is None else _expand(v)

    @model_validator(mode="after")
    def _one_source(self):
        if (self.file is None) == (self.data is None):
            raise ValueError("heightmap needs exactly one of 'file' or 'data'")
        return self


TerrainUnion = Annotated[
    TerrainFlatModel | TerrainHeightmapModel, Field(discriminator="kind")
]


class FlightModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    speed: float = Field(12.0, gt=0)
    duration: float = Field(6.0, gt=0)
    scale_by_length: bool = True
    eye_height: float = 1.5


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    log: LogModel = LogModel()
    scene: SceneModel
    graph: GraphModel = GraphModel()
    search: SearchUnion = Field(default_factory=SearchAStarModel)
    smoother: SmootherUnion = Field(default_factory=SmootherCollinearModel)
    terrain: TerrainUnion = Field(default_factory=TerrainFlatModel)
    flight: FlightModel = FlightModel()
    require_key_endpoints: bool = True
