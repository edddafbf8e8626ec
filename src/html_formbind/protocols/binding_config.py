"""Base configuration class for tree binding.

Holds the attribute names that make up the markup contract, plus the few
behaviour switches applications may want to flip.
"""

from typing import List, Optional
from dataclasses import dataclass, field


@dataclass
class BindingConfig:
    """Configuration for extraction and injection.

    Attributes:
        name_attr: Primary identifier attribute on form controls
        display_name_attr: Identifier attribute for non-form leaves
        row_index_attr: Marker stamped on grouped leaves by the row indexer
        check_off_value_attr: Value reported by an unchecked checkbox
        format_type_attr: Format type tag resolved against the FormatRegistry
        radio_name_attr: Pre-suffix name of a radio generated from a template
        template_holder_tag: Inert tag whose text holds the row markup
        default_row_tag: Row tag used when removing rows by search
        private_key_prefix: Value object keys starting with this are skipped
        default_scope_tags: Tags tried in order when no scope is given
        preserve_newlines: Keep line breaks (as '\\n') when sanitising text
    """

    name_attr: str = "name"
    display_name_attr: str = "data-name"
    row_index_attr: str = "data-obj-row-idx"
    check_off_value_attr: str = "data-check-off-value"
    format_type_attr: str = "data-value-format-type"
    radio_name_attr: str = "data-radio-obj-name"
    template_holder_tag: str = "script"
    default_row_tag: str = "tr"
    private_key_prefix: str = "_"
    default_scope_tags: List[str] = field(default_factory=lambda: ["main", "body"])
    preserve_newlines: bool = False
    log_dir: Optional[str] = None
    log_prefix: str = "html_formbind_"
    logger_name: str = "html_formbind"


# Global config instance (set by application)
_binding_config: Optional[BindingConfig] = None


def set_binding_config(config: Optional[BindingConfig]) -> None:
    """Set the global binding configuration.

    Args:
        config: BindingConfig instance, or None to restore defaults
    """
    global _binding_config
    _binding_config = config


def get_binding_config() -> BindingConfig:
    """Get the current binding configuration.

    Returns:
        Current BindingConfig or default if not set
    """
    if _binding_config is None:
        return BindingConfig()
    return _binding_config
