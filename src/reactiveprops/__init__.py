"""reactiveprops: observable values composed with map, bind and merge."""

from importlib.metadata import version as _version

__version__ = _version("reactiveprops")

from reactiveprops.errors import ReactivePropertyError, InvalidArgument, UnsupportedAccessor
from reactiveprops.equality import (
    default_equality,
    get_default_equality,
    ignore_case,
    set_default_equality,
    tuple_equality,
)
from reactiveprops.disposables import EMPTY, DisposableSet, Subscription
from reactiveprops.source import (
    PropertySource,
    constant,
    create,
    from_event,
    from_event_factory,
    notifying,
)
from reactiveprops.operators import (
    and_,
    as_instance,
    distinct,
    eager,
    lazy,
    merge,
    merge3,
    merge_all,
    or_,
    select,
    select_many,
)
from reactiveprops.stream import EventStream
from reactiveprops.subscriptions import (
    ChangeInfo,
    merge_subscribe,
    merge_subscribe3,
    notify_changes_as,
    subscribe,
    subscribe_to_changes,
    to_stream,
)
from reactiveprops.property import (
    Property,
    SettingData,
    bind_to,
    create_property,
    from_setting,
    from_value,
    property_select,
    property_select_many,
    two_way_bind,
)
from reactiveprops.registry import AccessorRegistry

__all__ = [
    "ReactivePropertyError",
    "InvalidArgument",
    "UnsupportedAccessor",
    "default_equality",
    "get_default_equality",
    "set_default_equality",
    "ignore_case",
    "tuple_equality",
    "Subscription",
    "DisposableSet",
    "EMPTY",
    "PropertySource",
    "create",
    "constant",
    "notifying",
    "from_event",
    "from_event_factory",
    "lazy",
    "eager",
    "distinct",
    "select",
    "select_many",
    "as_instance",
    "merge",
    "merge3",
    "merge_all",
    "and_",
    "or_",
    "EventStream",
    "ChangeInfo",
    "subscribe",
    "subscribe_to_changes",
    "merge_subscribe",
    "merge_subscribe3",
    "notify_changes_as",
    "to_stream",
    "Property",
    "SettingData",
    "create_property",
    "from_setting",
    "from_value",
    "bind_to",
    "two_way_bind",
    "property_select",
    "property_select_many",
    "AccessorRegistry",
]
