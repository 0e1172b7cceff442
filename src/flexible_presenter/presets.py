"""Named presenter presets.

Presets are methods marked with ``@register_preset(name)``. Each presenter
class collects them into an explicit name -> method-name registry when the
class is created, so ``preset("summary")`` is a dictionary lookup rather than
a search for a conventionally named method.
"""

from typing import Callable, Dict, TypeVar

F = TypeVar("F", bound=Callable)

PRESET_ATTRIBUTE = "__presenter_preset__"


def register_preset(name: str) -> Callable[[F], F]:
    """
    Mark a presenter method as the preset called ``name``.

    The method receives the presenter and configures it, usually through
    only(), except_() or with_().
    """
    if not name:
        raise ValueError("Preset name must be a non-empty string")

    def decorator(method: F) -> F:
        setattr(method, PRESET_ATTRIBUTE, name)
        return method

    return decorator


def collect_presets(cls: type) -> Dict[str, str]:
    """Build the preset registry for a class, subclass entries winning."""
    presets: Dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, member in vars(klass).items():
            preset_name = getattr(member, PRESET_ATTRIBUTE, None)
            if preset_name is not None:
                presets[preset_name] = attr_name
    return presets
