"""Parser options."""

from __future__ import annotations

from dataclasses import dataclass, fields

from .errors import OptionsError

ECMA_EDITIONS: set[int] = {3, 5, 6, 7, 8, 9, 10, 11, 12}

SOURCE_TYPES: set[str] = {"script", "module"}

# Minimum edition for each grammar feature.
CLASSES_VERSION = 6
ARROWS_VERSION = 6
ASYNC_VERSION = 8
ASYNC_GENERATOR_VERSION = 9
FIELDS_VERSION = 8


@dataclass
class Options:
    """Options for one parse.

    ecma_version accepts an edition number or a year (2015 means 6).
    class_fields opts in to class field and private name syntax.
    allow_reserved of None defaults to True for ES3 and False otherwise.
    """

    ecma_version: int = 9
    class_fields: bool = False
    source_type: str = "script"
    allow_reserved: bool | str | None = None

    def __post_init__(self) -> None:
        version = self.ecma_version
        if isinstance(version, bool) or not isinstance(version, int):
            raise OptionsError("ecma_version must be an integer, got " + repr(version))
        if version >= 2015:
            version -= 2009
        if version not in ECMA_EDITIONS:
            raise OptionsError("unsupported ecma_version: " + str(self.ecma_version))
        self.ecma_version = version
        if not isinstance(self.class_fields, bool):
            raise OptionsError("class_fields must be a bool")
        if self.source_type not in SOURCE_TYPES:
            raise OptionsError("source_type must be 'script' or 'module'")
        if self.allow_reserved is None:
            self.allow_reserved = self.ecma_version == 3
        if self.allow_reserved not in (True, False, "never"):
            raise OptionsError("allow_reserved must be True, False or 'never'")

    @classmethod
    def from_dict(cls, values: dict[str, object]) -> Options:
        known = {f.name for f in fields(cls)}
        for key in values:
            if key not in known:
                raise OptionsError("unknown option: " + key)
        return cls(**values)
