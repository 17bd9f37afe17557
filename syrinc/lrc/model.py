from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Tag:
    name: str
    value: str = ""


@dataclass(frozen=True, slots=True)
class PipelineState:
    correct_offset: bool = False
    override_offset: bool = False
    invert_offset: bool = False
    drop_metadata: bool = False
    running_offset: int = 0  # ms
