from collections.abc import Callable
from datetime import datetime
from typing import Any


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type AppConfigDocument = dict[str, Any]
type RedisConfiguration = dict[str, Any]

# Source of "now" for the engine and the sweeper
type Clock = Callable[[], datetime]
