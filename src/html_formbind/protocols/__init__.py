"""
Node protocol definitions and adapters.

ABC-based node contracts that eliminate duck typing in favor of
explicit, fail-loud inheritance-based architecture.
"""

from .binding_config import BindingConfig, set_binding_config, get_binding_config
from .node_protocols import (
    ValueGettable,
    ValueSettable,
    Checkable,
    FreeTextEditable,
)
from .node_adapters import (
    NodeAdapter,
    CheckAdapter,
    SelectAdapter,
    TextAreaAdapter,
    TextInputAdapter,
    InputAdapter,
    DisplayAdapter,
    adapter_for,
)

__all__ = [
    "BindingConfig",
    "set_binding_config",
    "get_binding_config",
    "ValueGettable",
    "ValueSettable",
    "Checkable",
    "FreeTextEditable",
    "NodeAdapter",
    "CheckAdapter",
    "SelectAdapter",
    "TextAreaAdapter",
    "TextInputAdapter",
    "InputAdapter",
    "DisplayAdapter",
    "adapter_for",
]
