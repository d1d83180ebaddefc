from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


# extra="allow": unknown on-chain fields stay on the model and take part in ==
class Blueprint(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    creator_id: int = Field(alias="creatorID")
    blueprint_id: int = Field(alias="blueprintID")
    metadata: Dict[str, str] = Field(default_factory=dict)
    creation_count: int = Field(default=0, alias="creationCount")
    # None = unlimited
    creation_limit: Optional[int] = Field(default=None, alias="creationLimit")


class Creator(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    creator_id: int = Field(alias="creatorID")
    creator_address: str = Field(alias="creatorAddress")
    creator_metadata: Dict[str, str] = Field(default_factory=dict, alias="creatorMetadata")
    current_series: int = Field(default=0, alias="currentSeries")
    next_blueprint_id: int = Field(default=1, alias="nextBlueprintID")
    next_set_id: int = Field(default=1, alias="nextSetID")
    num_creations: int = Field(default=0, alias="numCreations")
    blueprints: Dict[int, Blueprint] = Field(default_factory=dict)


class SetData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    creator_id: int = Field(alias="creatorID")
    set_id: int = Field(alias="setID")
    name: str
    # series of the creator when the set was created; later increments don't touch it
    series: int = 0
    locked: bool = False
    blueprint_ids: List[int] = Field(default_factory=list, alias="blueprintIDs")
    retired: Dict[int, bool] = Field(default_factory=dict)
    number_minted_per_blueprint: Dict[int, int] = Field(default_factory=dict, alias="numberMintedPerBlueprint")


class Creation(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    creator_id: int = Field(alias="creatorID")
    creation_id: int = Field(alias="creationID")
    set_id: int = Field(alias="setID")
    blueprint_id: int = Field(alias="blueprintID")
    serial_number: int = Field(alias="serialNumber")
