from typing import Any, Dict, List, Optional
from enum import Enum

from pydantic import BaseModel, Field
from pydantic import field_validator, model_validator


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"
    critical = "critical"


class BindingSpec(BaseModel):
    """
    Binds a chord to an action.
    - keys: space separated event names, each optionally followed by ".Field"
      to pass that event field to the action (e.g. "Ctrl-X Ctrl-S", "Paste.Text").
    - action: built-in action name (e.g. "save") or a registered script action.
    - args: static arguments passed before the extracted fields.
    """

    keys: str
    action: str
    args: List[Any] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> Any:
        # "Ctrl-X Ctrl-S=save" shorthand
        if isinstance(v, str):
            keys, sep, action = v.rpartition("=")
            if not sep or not keys.strip() or not action.strip():
                raise ValueError("Binding shorthand must look like 'keys=action'")
            return {"keys": keys.strip(), "action": action.strip()}
        return v

    @field_validator("keys")
    @classmethod
    def _validate_keys(cls, v: str) -> str:
        if not v.split():
            raise ValueError("Binding keys must not be empty")
        return v


class Settings(BaseModel):
    tab_width: int = Field(default=4, ge=1)
    scroll_lines: int = Field(default=1, ge=1)
    backup_suffix: str = "~"
    log_level: LogLevel = LogLevel.info
    log_max_entries: Optional[int] = Field(default=1000, ge=1)
    # Buffer kind -> bindings; "app" is the global scope tried after the kind's own.
    bindings: Dict[str, List[BindingSpec]] = Field(default_factory=dict)
