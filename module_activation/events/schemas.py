"""Activation event schemas."""

from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import Field


class ActivationImportEvent(BaseModel):
    """Emitted once a site has resolved its activated modules."""

    type: Literal["activation_import"] = "activation_import"
    site: Any = Field(None, description="Site that resolved the modules")
    configurations: list[str] = Field(default_factory=list, description="Accepted module ids in order")
    exclusions: list[str] = Field(default_factory=list, description="Module ids excluded by the site")


ActivationEvent = ActivationImportEvent
