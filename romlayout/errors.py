from typing import Optional

__all__ = [
    "CapacityExceeded",
    "DuplicateIncludeSpec",
    "DuplicateName",
    "InvalidIncludeSpec",
    "LayoutError",
    "LayoutFileError",
    "LineTooLong",
    "MalformedEntry",
    "MalformedLayout",
    "NoLayoutLoaded",
    "OverrideFileError",
    "RegionOutOfBounds",
    "SizeMismatch",
    "SourceCycle",
    "SourceError",
    "UnknownRegion",
    "UnsupportedVersion",
]


# Every failure is fatal to the current operation. Whatever state was being
# built (table, output image) must be discarded by the caller.
class LayoutError(RuntimeError):
    pass


class MalformedLayout(LayoutError):
    pass


class MalformedEntry(LayoutError):
    def __init__(self, msg: str, filename: Optional[str] = None, line: int = 0):
        self.filename = filename
        self.line = line
        if filename is not None:
            msg = f"{filename}:{line}: {msg}"
        super().__init__(msg)


class UnsupportedVersion(MalformedLayout):
    def __init__(self, version: int, filename: str):
        self.version = version
        super().__init__(f"unknown layout file version {version} in {filename!r}")


class LineTooLong(MalformedLayout):
    pass


class DuplicateName(LayoutError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"region name {name!r} used multiple times")


class CapacityExceeded(LayoutError):
    pass


class LayoutFileError(LayoutError):
    pass


class SourceCycle(LayoutError):
    pass


class OverrideFileError(LayoutError):
    pass


class SizeMismatch(LayoutError):
    def __init__(self, filename: str, got: int, expected: int):
        self.filename = filename
        self.got = got
        self.expected = expected
        super().__init__(
            f"override file {filename!r} is {got} bytes, region is {expected} bytes"
        )


class UnknownRegion(LayoutError):
    pass


class NoLayoutLoaded(LayoutError):
    pass


class InvalidIncludeSpec(LayoutError):
    pass


class DuplicateIncludeSpec(LayoutError):
    pass


class RegionOutOfBounds(LayoutError):
    pass


class SourceError(LayoutError):
    pass
