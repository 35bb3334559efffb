"""Request state layer.

Binds one asynchronous call at a time to an observable
``data``/``loading``/``error`` snapshot, independent of any UI toolkit.
"""

from pymusic.state.coordinator import RequestCoordinator, StateCallback
from pymusic.state.request_state import RequestState

__all__ = ["RequestCoordinator", "RequestState", "StateCallback"]
