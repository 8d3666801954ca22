"""Base Pydantic model for shapeguard.

Every schema node, option set and violation record derives from this class so
the whole package shares one configuration:

- Strict field validation (unknown attributes are rejected)
- Immutable instances, so a parsed schema can be shared between calls

Example:
    >>> from shapeguard._base import GuardBaseModel
    >>>
    >>> class Limits(GuardBaseModel):
    ...     low: int = 0
    >>>
    >>> Limits(low=3).model_dump()
    {'low': 3}
"""

from pydantic import BaseModel, ConfigDict


class GuardBaseModel(BaseModel):
    """Base model for all shapeguard Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
