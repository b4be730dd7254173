"""
Data member enumeration and member selector resolution.

A member is a public data attribute of a class: a property (or cached_property), a dataclass
field, an annotated attribute, a slot, or an attribute assigned on `self` in __init__.
Methods, ClassVar annotations and unannotated class constants are not members.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import dis
import functools
import inspect
import types
import typing
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Callable, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidSelectorError
from .formatters import fmt_type, fmt_value
from .utils import class_name

_MISSING = object()


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class MemberKind(str, Enum):
    """Property-like members are listed before field-like ones."""
    PROPERTY = "property"
    FIELD = "field"


@dataclass(frozen=True)
class MemberKey:
    """
    Stable identity of a data member: the declaring class plus the member name.

    Attributes:
        owner: The class which declares the member (first in the MRO).
        name: Member name.
    """
    owner: type
    name: str

    def __str__(self) -> str:
        return f"{class_name(self.owner)}.{self.name}"


@dataclass(frozen=True)
class Member:
    """
    Data member descriptor produced by member enumeration.

    Attributes:
        key: Member identity used for exclusion and formatter lookup.
        kind: Property-like or field-like.
        declared_type: Class named by the member annotation, None if unknown.
    """
    key: MemberKey
    kind: MemberKind
    declared_type: type | None = None

    @property
    def name(self) -> str:
        return self.key.name

    @property
    def owner(self) -> type:
        return self.key.owner

    def get(self, obj: Any) -> Any:
        """Read the member value from obj."""
        return getattr(obj, self.name)

    def type_of(self, value: Any) -> type | None:
        """Return the declared type, falling back to the runtime type of value."""
        if self.declared_type is not None:
            return self.declared_type
        return None if value is None else type(value)


class _SelectorProbe:
    """Records the attribute chain a selector callable reads."""

    __slots__ = ("_probe_path",)

    def __init__(self, path: tuple[str, ...] = ()) -> None:
        object.__setattr__(self, "_probe_path", path)

    def __getattr__(self, name: str) -> "_SelectorProbe":
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return _SelectorProbe(self._probe_path + (name,))

    def __setattr__(self, name: str, value: Any) -> None:
        raise InvalidSelectorError("Selector must not assign attributes")

    def __call__(self, *args, **kwargs):
        path = ".".join(self._probe_path)
        raise InvalidSelectorError(f"Selector must be a plain attribute access, but it calls '{path}'")


# Methods --------------------------------------------------------------------------------------------------------------

def get_members(obj: Any) -> list[Member]:
    """
    Return the data members of obj in rendering order.

    Properties come first, then fields; each group in declaration order with base classes
    first. Instance attributes not declared on the class are appended to the fields.
    Annotated fields without a value on obj are left out.

    Args:
        obj: Any object.

    Returns:
        Ordered list of Member descriptors.
    """
    cls = type(obj)
    declared = _class_members(cls)
    result = []
    for member in declared:
        if member.kind is MemberKind.FIELD and not _has_value(obj, member.name):
            continue
        result.append(member)

    known = {member.name for member in declared}
    for name in _instance_attrs(obj):
        if name in known:
            continue
        result.append(Member(MemberKey(_init_declaring_class(cls, name), name), MemberKind.FIELD))
    return result


def resolve_member(owner: type, name: str) -> Member:
    """
    Resolve a member of owner by name without needing an instance.

    Raises:
        TypeError: If owner is not a class or name is not a str.
        InvalidSelectorError: If the name is private, a method, or not a data member of owner.
    """
    if not isinstance(owner, type):
        raise TypeError(f"owner must be a class, but got {fmt_type(owner)}")
    if not isinstance(name, str):
        raise TypeError(f"member name must be a str, but got {fmt_type(name)}")
    if not name.isidentifier() or name.startswith("_"):
        raise InvalidSelectorError(f"{fmt_value(name)} is not a public member name of {class_name(owner)}")

    for member in _class_members(owner):
        if member.name == name:
            return member

    attr = inspect.getattr_static(owner, name, _MISSING)
    if attr is not _MISSING and _is_routine(attr):
        raise InvalidSelectorError(f"{class_name(owner)}.{name} is a method, not a data member")

    if any(name in _init_assigned(klass) for klass in owner.__mro__):
        return Member(MemberKey(_init_declaring_class(owner, name), name), MemberKind.FIELD)

    raise InvalidSelectorError(f"{class_name(owner)} has no data member {fmt_value(name)}")


def select_member(owner: type, selector: "str | Callable[[Any], Any] | MemberKey") -> Member:
    """
    Resolve a member selector against owner.

    A selector can be a member name ("age"), a dotted path ("mom.name"), a callable reading
    an attribute chain (lambda p: p.mom.name) or a MemberKey. Paths resolve hop by hop
    through declared types; the last hop's member is returned.

    Raises:
        InvalidSelectorError: If any hop does not resolve to a data member, or an intermediate
            hop has no declared type.
        TypeError: If selector is of an unsupported kind.

    Examples:
        >>> @dataclass
        ... class Person:
        ...     name: str
        >>> str(select_member(Person, lambda p: p.name).key)
        'Person.name'
    """
    if isinstance(selector, MemberKey):
        if not (isinstance(owner, type) and issubclass(owner, selector.owner)):
            raise InvalidSelectorError(f"{selector} is not a member of {fmt_type(owner)}")
        return resolve_member(selector.owner, selector.name)

    if isinstance(selector, str):
        path = tuple(selector.split("."))
    elif callable(selector) and not isinstance(selector, type):
        path = _selector_path(selector)
    else:
        raise TypeError(f"selector must be a str, callable or MemberKey, but got {fmt_type(selector)}")

    current = owner
    member = None
    for hop, name in enumerate(path):
        if member is not None:
            current = member.declared_type
            if current is None:
                walked = ".".join(path[:hop])
                raise InvalidSelectorError(f"Cannot resolve '{'.'.join(path)}': type of '{walked}' is unknown, "
                                           f"annotate {member.key} with a class")
        member = resolve_member(current, name)
    return member


def declared_type(hint: Any) -> type | None:
    """
    Reduce a type hint to the class used for rule lookup.

    Optional[X] and X | None reduce to X, Annotated[X, ...] to X, generic aliases to their
    origin (list[int] -> list). Anything else yields None.
    """
    if isinstance(hint, type) and not isinstance(hint, types.GenericAlias):
        return hint

    origin = typing.get_origin(hint)
    if origin is typing.Annotated:
        return declared_type(typing.get_args(hint)[0])
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return declared_type(args[0]) if len(args) == 1 else None
    if isinstance(origin, type):
        return origin
    return None


# Private Methods ------------------------------------------------------------------------------------------------------

def _class_members(cls: type) -> tuple[Member, ...]:
    """Return declared members of cls: properties first, then fields."""
    properties = _class_properties(cls)
    fields = [member for member in _class_fields(cls) if member.name not in {p.name for p in properties}]
    return tuple(properties) + tuple(fields)


def _class_properties(cls: type) -> list[Member]:
    found: dict[str, Member] = {}
    for klass in _mro_base_first(cls):
        for name, attr in vars(klass).items():
            if name.startswith("_"):
                continue
            if isinstance(attr, property):
                hint = _return_hint(attr.fget)
            elif isinstance(attr, functools.cached_property):
                hint = _return_hint(attr.func)
            else:
                # Redefined as a plain attribute in a subclass
                found.pop(name, None)
                continue
            found[name] = Member(MemberKey(klass, name), MemberKind.PROPERTY, declared_type(hint))
    return list(found.values())


def _class_fields(cls: type) -> list[Member]:
    hints = _type_hints(cls)
    found: dict[str, Member] = {}

    if dataclasses.is_dataclass(cls):
        for field in dataclasses.fields(cls):
            if field.name.startswith("_"):
                continue
            owner = _annotation_owner(cls, field.name)
            found[field.name] = Member(MemberKey(owner, field.name), MemberKind.FIELD,
                                       declared_type(hints.get(field.name, field.type)))

    for klass in _mro_base_first(cls):
        for name in inspect.get_annotations(klass):
            if name.startswith("_") or name in found:
                continue
            hint = hints.get(name)
            if typing.get_origin(hint) is typing.ClassVar or hint is typing.ClassVar:
                continue
            found[name] = Member(MemberKey(klass, name), MemberKind.FIELD, declared_type(hint))

        for name in _slot_names(klass):
            if name.startswith("_") or name in found:
                continue
            found[name] = Member(MemberKey(klass, name), MemberKind.FIELD)

    return list(found.values())


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolved annotations of cls and its bases; unresolvable forward references are dropped."""
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError, AttributeError):
        hints = {}
        for klass in _mro_base_first(cls):
            for name, hint in inspect.get_annotations(klass).items():
                if not isinstance(hint, str):
                    hints[name] = hint
        return hints


def _return_hint(fn: Callable | None) -> Any:
    if fn is None:
        return None
    try:
        return typing.get_type_hints(fn).get("return")
    except (NameError, TypeError, AttributeError):
        return None


def _annotation_owner(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in inspect.get_annotations(klass):
            return klass
    return cls


def _mro_base_first(cls: type) -> Iterator[type]:
    for klass in reversed(cls.__mro__):
        if klass is not object:
            yield klass


def _slot_names(klass: type) -> tuple[str, ...]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return tuple(name for name in slots if name not in ("__dict__", "__weakref__"))


def _init_assigned(klass: type) -> frozenset[str]:
    """Names stored as attributes inside klass.__init__ (self.x = ...)."""
    init = vars(klass).get("__init__")
    if not inspect.isfunction(init):
        return frozenset()
    return frozenset(ins.argval for ins in dis.get_instructions(init) if ins.opname == "STORE_ATTR")


def _init_declaring_class(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in _init_assigned(klass):
            return klass
    return cls


def _instance_attrs(obj: Any) -> list[str]:
    try:
        attrs = vars(obj)
    except TypeError:
        return []
    return [name for name, value in attrs.items()
            if isinstance(name, str) and not name.startswith("_")
            and not _is_routine(value) and not isinstance(value, property)]


def _has_value(obj: Any, name: str) -> bool:
    # Slot descriptors exist on the class even when the slot is empty
    return getattr(obj, name, _MISSING) is not _MISSING


def _is_routine(attr: Any) -> bool:
    return inspect.isroutine(attr) or isinstance(attr, (staticmethod, classmethod))


def _selector_path(selector: Callable[[Any], Any]) -> tuple[str, ...]:
    try:
        probe = selector(_SelectorProbe())
    except TypeError as e:
        raise InvalidSelectorError(f"Selector must be a plain attribute access, e.g. lambda p: p.name ({e})") from e
    if not isinstance(probe, _SelectorProbe) or not probe._probe_path:
        raise InvalidSelectorError("Selector must return an attribute of its argument, e.g. lambda p: p.name")
    return probe._probe_path
