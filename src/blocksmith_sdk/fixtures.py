"""
Expected-state builders for assertions against freshly deployed contracts.

Everything defaults to creator 1 and id 1; tests tweak the returned model
(``expected.set_id = 2``) when they need another shape.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional

from .models.blocksmith import Blueprint, Creator, SetData


def default_creator(creator_address: str) -> Creator:
    return Creator(
        creator_id=1,
        creator_address=creator_address,
        creator_metadata={},
        current_series=0,
        next_blueprint_id=1,
        next_set_id=1,
        num_creations=0,
        blueprints={},
    )


def default_blueprint(metadata: Dict[str, str], creation_limit: Optional[int]) -> Blueprint:
    return Blueprint(
        creator_id=1,
        blueprint_id=1,
        metadata=dict(metadata),
        creation_count=0,
        creation_limit=creation_limit,
    )


def default_set(set_name: str) -> SetData:
    return SetData(
        creator_id=1,
        set_id=1,
        name=set_name,
        series=0,
        locked=False,
        blueprint_ids=[],
        retired={},
        number_minted_per_blueprint={},
    )


def default_set_with_blueprints(set_name: str, blueprint_ids: Iterable[int]) -> SetData:
    ids = list(blueprint_ids)
    return SetData(
        creator_id=1,
        set_id=1,
        name=set_name,
        series=0,
        locked=False,
        blueprint_ids=ids,
        retired={i: False for i in ids},
        number_minted_per_blueprint={i: 0 for i in ids},
    )
