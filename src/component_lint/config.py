import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_PROP_WRAPPERS_ENV = "COMPONENT_LINT_PROP_WRAPPERS"
_DEFAULT_WRAPPERS = ("forbidExtraProps", "exact")


class SortPolicy(BaseModel):
    """Options of the prop-type ordering rule, keyed by their camelCase names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True)

    required_first: bool = False
    callbacks_last: bool = False
    ignore_case: bool = False
    no_sort_alphabetically: bool = False
    sort_shape_prop: bool = False


class PropWrapper(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    property: str
    object: str | None = None


class LintSettings(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)

    prop_wrapper_functions: list[str | PropWrapper] = Field(default_factory=list)

    def wrappers(self) -> list[str | PropWrapper]:
        extra = [name.strip() for name in os.getenv(_PROP_WRAPPERS_ENV, "").split(",") if name.strip()]
        return [*_DEFAULT_WRAPPERS, *self.prop_wrapper_functions, *extra]

    def is_prop_wrapper_function(self, name: str | None) -> bool:
        """Match ``name`` (``fn`` or ``object.fn``) against the configured wrapper functions."""
        if not isinstance(name, str):
            return False
        split_name = name.split(".")
        for wrapper in self.wrappers():
            if isinstance(wrapper, str):
                if wrapper == name:
                    return True
                continue
            if len(split_name) == 2 and wrapper.object == split_name[0] and wrapper.property == split_name[1]:
                return True
            if wrapper.property == name:
                return True
        return False


def load_policy(options: Mapping[str, Any] | SortPolicy | None = None) -> SortPolicy:
    if isinstance(options, SortPolicy):
        return options
    return SortPolicy.model_validate(dict(options or {}))


def load_settings(settings: Mapping[str, Any] | LintSettings | None = None) -> LintSettings:
    if isinstance(settings, LintSettings):
        return settings
    return LintSettings.model_validate(dict(settings or {}))
