"""Load model: turn the learner's multiplier into users and request rate."""

from __future__ import annotations

from dataclasses import dataclass

from scalemind.core.config import ModelParameters


@dataclass(frozen=True)
class LoadFigures:
    active_users: int
    requests_per_second: int


def compute_load(multiplier: float, params: ModelParameters | None = None) -> LoadFigures:
    """Scale the nominal population by ``multiplier``.

    ``multiplier`` must be finite and non-negative; the engine clamps
    user input before it reaches this function.
    """
    if params is None:
        params = ModelParameters()
    active_users = round(params.base_user_count * multiplier)
    requests_per_second = round(active_users * params.requests_per_user_per_second)
    return LoadFigures(active_users=active_users, requests_per_second=requests_per_second)
