"""Custom exception classes for flexible_presenter."""

from typing import Iterable, List


class FlexiblePresenterError(Exception):
    """Base exception for all flexible_presenter errors."""
    pass


class InvalidPresenterKeys(FlexiblePresenterError):
    """Raised when only()/except_() reference keys the presenter does not define."""

    def __init__(self, message: str, keys: List[str], method: str):
        super().__init__(message)
        self.keys = keys
        self.method = method

    @classmethod
    def keys_not_defined(cls, invalid_keys: Iterable[str], method: str) -> "InvalidPresenterKeys":
        """
        Build the error for keys passed to a selection method.

        Args:
            invalid_keys: Keys missing from the catalog and supplemental fields
            method: Name of the selection method that introduced them

        Returns:
            InvalidPresenterKeys instance
        """
        keys = list(invalid_keys)
        prefix = "key is" if len(keys) == 1 else "keys are"

        message = f"Invalid keys passed to {method}() method. "
        message += f"The invalid {prefix}: {_join_keys(keys)}"

        return cls(message, keys=keys, method=method)


class InvalidPresenterPreset(FlexiblePresenterError):
    """Raised when preset() is called with a name the presenter does not register."""

    def __init__(self, message: str, preset: str):
        super().__init__(message)
        self.preset = preset

    @classmethod
    def preset_not_found(cls, name: str, presenter: str) -> "InvalidPresenterPreset":
        return cls(f"There is no preset on {presenter} with the name '{name}'", preset=name)


class ConfigError(FlexiblePresenterError):
    """Raised when configuration is invalid or missing."""
    pass


class ScaffoldError(FlexiblePresenterError):
    """Raised when a presenter module cannot be generated."""
    pass


class PresenterExistsError(ScaffoldError):
    """Raised when the target presenter module exists and overwriting was not forced."""
    pass


def _join_keys(keys: List[str]) -> str:
    """Join keys as 'a, b and c'."""
    if len(keys) < 2:
        return "".join(keys)
    return ", ".join(keys[:-1]) + " and " + keys[-1]
