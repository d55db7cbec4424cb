from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform()
class Service:
    """Base for domain services.

    Subclasses become dataclasses: collaborators are declared as annotated
    class attributes and injected through the generated ``__init__``.
    Services keep no per-request state.
    """

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        dataclass(cls)
