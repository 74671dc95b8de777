"""
cached_remote_data - the lifecycle of fetched, cacheable values as data.

``CachedRemoteData`` extends the four ``RemoteData`` states (NotAsked,
Loading, Failure, Success) with Refreshing and Stale, so a previously
fetched value can still be shown while a refresh is in flight or after it
failed.

Example:
    >>> from cached_remote_data import Err, Some, from_value_and_result, value
    >>> state = from_value_and_result(Some("data"), Err("timeout"))
    >>> state
    Stale(error='timeout', value='data')
    >>> value(state).unwrap()
    'data'
"""

from cached_remote_data import cached
from cached_remote_data.cached import (
    VARIANTS,
    CachedRemoteData,
    Refreshing,
    Stale,
    and_map,
    and_then,
    error,
    from_optional,
    from_remote_data,
    from_result,
    from_value,
    from_value_and_remote_data,
    from_value_and_result,
    has_error,
    has_value,
    is_failure,
    is_loading,
    is_not_asked,
    is_pending,
    is_refreshing,
    is_settled,
    is_stale,
    is_success,
    map,
    map2,
    map3,
    map_both,
    map_error,
    map_n,
    remote_data,
    result,
    settle,
    succeed,
    to_pending,
    value,
    with_default,
)
from cached_remote_data.config import StoreConfig
from cached_remote_data.errors import UnknownVariantError, UnwrapError
from cached_remote_data.remote import (
    Failure,
    Loading,
    NotAsked,
    RemoteData,
    Success,
    is_remote_data,
)
from cached_remote_data.results import NOTHING, Err, Maybe, Nothing, Ok, Result, Some
from cached_remote_data.store import CachedDataStore
from cached_remote_data.transport import (
    Operation,
    safe,
    send_request,
    send_request_with_cached_data,
    send_request_with_value,
)

__version__ = "0.1.0"

__all__ = [
    "NOTHING",
    "VARIANTS",
    "CachedDataStore",
    "CachedRemoteData",
    "Err",
    "Failure",
    "Loading",
    "Maybe",
    "NotAsked",
    "Nothing",
    "Ok",
    "Operation",
    "Refreshing",
    "RemoteData",
    "Result",
    "Some",
    "Stale",
    "StoreConfig",
    "Success",
    "UnknownVariantError",
    "UnwrapError",
    "and_map",
    "and_then",
    "cached",
    "error",
    "from_optional",
    "from_remote_data",
    "from_result",
    "from_value",
    "from_value_and_remote_data",
    "from_value_and_result",
    "has_error",
    "has_value",
    "is_failure",
    "is_loading",
    "is_not_asked",
    "is_pending",
    "is_refreshing",
    "is_remote_data",
    "is_settled",
    "is_stale",
    "is_success",
    "map",
    "map2",
    "map3",
    "map_both",
    "map_error",
    "map_n",
    "remote_data",
    "result",
    "safe",
    "send_request",
    "send_request_with_cached_data",
    "send_request_with_value",
    "settle",
    "succeed",
    "to_pending",
    "value",
    "with_default",
]
