"""
Copy the current row into the writable members of an object.
"""
import dataclasses
import logging
import types
from typing import TypeVar

from dbreader.cursor import RowCursor

logger = logging.getLogger(__name__)

T = TypeVar('T')


def writable_members(target: object) -> dict[str, str]:
    """Map casefolded member name -> member name for every externally
    writable member of ``target``.

    Writable members are public instance attributes, plain class attributes
    the instance can shadow, properties with a setter, and ``__slots__``
    members. Methods are not members. Frozen dataclasses have none.
    """
    if dataclasses.is_dataclass(target) and target.__dataclass_params__.frozen:
        return {}

    has_dict = hasattr(target, '__dict__')
    members: dict[str, str] = {}
    for klass in reversed(type(target).__mro__):
        for name, attr in vars(klass).items():
            if name.startswith('_'):
                continue
            if isinstance(attr, property):
                if attr.fset is not None:
                    members[name.casefold()] = name
                else:
                    members.pop(name.casefold(), None)
            elif isinstance(attr, types.MemberDescriptorType):
                members[name.casefold()] = name
            elif isinstance(attr, (classmethod, staticmethod)) or callable(attr) or not has_dict:
                members.pop(name.casefold(), None)
            else:
                members[name.casefold()] = name

    for name in getattr(target, '__dict__', {}):
        if not name.startswith('_') and name.casefold() not in members:
            members[name.casefold()] = name
    return members


def fill(reader: RowCursor, target: T) -> T:
    """Assign each field of the current row to the same-named writable member.

    Names match case-insensitively; NULL assigns None. Members without a
    matching field are left untouched and extra fields are ignored. A failing
    assignment propagates, leaving earlier members assigned. Returns
    ``target``.
    """
    members = writable_members(target)
    matched = 0
    for i in range(reader.field_count):
        member = members.get(reader.get_name(i).casefold())
        if member is None:
            continue
        value = None if reader.is_null(i) else reader.get_value(i)
        setattr(target, member, value)
        matched += 1
    logger.debug(f'Filled {matched} of {len(members)} members on {type(target).__name__}')
    return target
